# tests/test_engine.py

import unittest

import config
from algorithms import get_algorithm
from engine import Duel, Recorder, Stepper, StepperState, compare, reference_comparison
from tests.helpers import TRAP_CAPACITY, TRAP_ITEMS


class TestStepper(unittest.TestCase):

    def setUp(self):
        self.finished = []
        self.frames = []
        self.stepper = Stepper(
            get_algorithm("greedy"),
            on_step=self.frames.append,
            on_finish=self.finished.append,
        )

    def test_idle_until_started(self):
        self.assertIs(self.stepper.state, StepperState.IDLE)
        self.assertIsNone(self.stepper.current_step)
        self.assertFalse(self.stepper.next_step())
        self.stepper.play(now=0.0)
        self.assertIs(self.stepper.state, StepperState.IDLE)

    def test_start_leaves_paused(self):
        self.stepper.start(TRAP_ITEMS, TRAP_CAPACITY)
        self.assertIs(self.stepper.state, StepperState.PAUSED)
        self.assertEqual(len(self.frames), 1)
        self.assertEqual(self.stepper.current_step.phase, "not-started")

    def test_tick_respects_speed(self):
        self.stepper.start(TRAP_ITEMS, TRAP_CAPACITY)
        self.stepper.set_speed_value(0.5)
        self.stepper.play(now=0.0)
        self.assertFalse(self.stepper.tick(now=0.1))
        self.assertTrue(self.stepper.tick(now=0.5))
        self.assertFalse(self.stepper.tick(now=0.6))
        self.assertTrue(self.stepper.tick(now=1.0))
        self.assertEqual(self.stepper.steps_taken, 2)

    def test_paused_stepper_ignores_ticks(self):
        self.stepper.start(TRAP_ITEMS, TRAP_CAPACITY)
        self.assertFalse(self.stepper.tick(now=100.0))
        self.assertEqual(self.stepper.steps_taken, 0)

    def test_finish_fires_once(self):
        self.stepper.start(TRAP_ITEMS, TRAP_CAPACITY)
        self.stepper.jump_to_end()
        self.assertTrue(self.stepper.is_finished)
        self.assertFalse(self.stepper.next_step())
        self.assertEqual(len(self.finished), 1)
        self.assertEqual(self.finished[0].total_value, 30)

    def test_restart(self):
        self.stepper.start(TRAP_ITEMS, TRAP_CAPACITY)
        self.stepper.jump_to_end()
        self.stepper.restart()
        self.assertIs(self.stepper.state, StepperState.PAUSED)
        self.assertEqual(self.stepper.steps_taken, 0)

    def test_speed_floor(self):
        self.stepper.set_speed_value(0.0)
        self.assertEqual(self.stepper.speed, 0.02)
        self.stepper.set_speed("fast")
        self.assertEqual(self.stepper.speed, 0.15)


class TestRecorder(unittest.TestCase):

    def test_records_every_frame(self):
        rec = Recorder()
        rec.start("dp", TRAP_ITEMS, TRAP_CAPACITY)
        self.assertIsNone(rec.metrics)
        metrics = rec.run_to_completion()

        self.assertIs(rec.metrics, metrics)
        self.assertEqual(metrics.total_steps, 37)
        # reset frame plus one per advance
        self.assertEqual(len(rec.steps), 38)
        self.assertTrue(metrics.agrees_with_reference)
        self.assertEqual(metrics.total_value, 40)
        self.assertTrue(rec.steps[-1].is_final)

    def test_compare(self):
        greedy, dp = Recorder(), Recorder()
        greedy.start("greedy", TRAP_ITEMS, TRAP_CAPACITY)
        dp.start("dp", TRAP_ITEMS, TRAP_CAPACITY)
        greedy.run_to_completion()
        dp.run_to_completion()

        comp = compare(greedy, dp)
        self.assertEqual(comp.optimality_gap, 10)
        self.assertFalse(comp.greedy_optimal)
        self.assertEqual(comp.to_dict()["dp"]["selected_ids"], ["c", "b"])

    def test_export(self):
        rec = Recorder()
        rec.start("greedy", TRAP_ITEMS, TRAP_CAPACITY)
        rec.run_to_completion()
        data = rec.export()
        self.assertEqual(data["algo_key"], "greedy")
        self.assertEqual(len(data["items"]), 3)
        self.assertEqual(len(data["steps"]), 8)

    def test_errors(self):
        with self.assertRaises(ValueError):
            Recorder().start("bogus", TRAP_ITEMS, TRAP_CAPACITY)
        with self.assertRaises(RuntimeError):
            Recorder().run_to_completion()

    def test_reference_comparison(self):
        comp = reference_comparison(TRAP_ITEMS, TRAP_CAPACITY)
        self.assertEqual(comp.greedy.total_value, 30)
        self.assertEqual(comp.dp.total_value, 40)
        self.assertEqual(comp.dp.algo_label, "Dynamic Programming")


class TestDuel(unittest.TestCase):

    def test_dp_ticks_faster(self):
        duel = Duel(TRAP_ITEMS, TRAP_CAPACITY, speed=0.4)
        self.assertAlmostEqual(duel.greedy.speed, 0.4)
        self.assertAlmostEqual(duel.dp.speed, 0.4 / config.DP_SPEED_DIVISOR)

        duel.set_speed(0.05)
        self.assertAlmostEqual(duel.dp.speed, config.MIN_INTERVAL)

    def test_results_revealed_when_both_finish(self):
        duel = Duel(TRAP_ITEMS, TRAP_CAPACITY, speed=0.4)
        duel.run(now=0.0)
        self.assertTrue(duel.is_running)
        self.assertIsNone(duel.results)

        t = 0.0
        while not duel.is_finished:
            t += 0.05
            duel.tick(now=t)
            if not duel.is_finished:
                self.assertIsNone(duel.results)
            self.assertLess(t, 60)

        results = duel.results
        self.assertIsNotNone(results)
        self.assertEqual(results.greedy.total_value, 30)
        self.assertEqual(results.dp.total_value, 40)
        self.assertFalse(duel.is_running)

    def test_manual_steps(self):
        duel = Duel(TRAP_ITEMS, TRAP_CAPACITY)
        self.assertEqual(duel.step(), {"greedy": True, "dp": True})
        self.assertTrue(duel.has_run)
        while not duel.is_finished:
            duel.step()
        self.assertEqual(duel.greedy.result.total_value, 30)
        self.assertEqual(duel.results.optimality_gap, 10)

    def test_configure_resets(self):
        duel = Duel(TRAP_ITEMS, TRAP_CAPACITY)
        duel.run(now=0.0)
        duel.configure(TRAP_ITEMS[:1], 6)
        self.assertFalse(duel.is_running)
        self.assertFalse(duel.has_run)
        self.assertEqual(duel.greedy.steps_taken, 0)
        self.assertEqual(duel.snapshot()["capacity"], 6)

    def test_run_after_finish_starts_over(self):
        duel = Duel(TRAP_ITEMS, TRAP_CAPACITY)
        while not duel.is_finished:
            duel.step()
        duel.run(now=0.0)
        self.assertTrue(duel.is_running)
        self.assertEqual(duel.dp.steps_taken, 0)

    def test_reset_keeps_configuration(self):
        duel = Duel(TRAP_ITEMS, TRAP_CAPACITY)
        for _ in range(5):
            duel.step()
        duel.reset()
        self.assertEqual(duel.greedy.steps_taken, 0)
        self.assertEqual(duel.dp.steps_taken, 0)
        self.assertFalse(duel.has_run)
        self.assertEqual(len(duel.greedy.current_step.overlay["order"]), 3)

    def test_speed_preset(self):
        duel = Duel(TRAP_ITEMS, TRAP_CAPACITY)
        duel.set_speed_preset("slow")
        self.assertAlmostEqual(duel.speed, 1.0)
        self.assertAlmostEqual(duel.dp.speed, 1.0 / config.DP_SPEED_DIVISOR)
        duel.set_speed_preset("unknown")
        self.assertAlmostEqual(duel.speed, 0.5)

    def test_matching_runs_log_no_error(self):
        duel = Duel(TRAP_ITEMS, TRAP_CAPACITY)
        with self.assertLogs("engine.duel", level="INFO") as logs:
            while not duel.is_finished:
                duel.step()
        self.assertFalse([r for r in logs.records if r.levelname == "ERROR"])

    def test_selection_mismatch_is_logged(self):
        """Same value but a different selection still counts as a disagreement"""
        duel = Duel(TRAP_ITEMS, TRAP_CAPACITY)
        duel.step()
        duel._pending.dp.selected_ids = ["b", "c"]
        with self.assertLogs("engine.duel", level="ERROR") as logs:
            while not duel.is_finished:
                duel.step()
        self.assertEqual(len(logs.records), 1)
        self.assertIn("dp stepper finished on", logs.output[0])


if __name__ == "__main__":
    unittest.main()
