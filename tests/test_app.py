# tests/test_app.py

import unittest
from unittest import mock

import config
import main


class TestApp(unittest.TestCase):

    def setUp(self):
        main.app.config["TESTING"] = True
        self.client = main.app.test_client()

    def post(self, url, data=None):
        return self.client.post(url, json=data or {})

    def run_to_end(self):
        for _ in range(500):
            data = self.post("/api/step").get_json()
            if data["state"]["finished"]:
                return data
        self.fail("duel never finished")

    def test_index(self):
        res = self.client.get("/")
        self.assertEqual(res.status_code, 200)
        self.assertIn(b"Knapsack Duel", res.data)
        self.assertIn(b"Laptop", res.data)

    def test_state(self):
        data = self.client.get("/api/state").get_json()
        self.assertEqual(data["state"]["capacity"], 10)
        self.assertFalse(data["state"]["running"])
        self.assertEqual(data["state"]["greedy"]["phase"], "not-started")
        self.assertEqual(data["state"]["dp"]["phase"], "filling")

    def test_results_hidden_until_finished(self):
        self.assertIsNone(self.client.get("/api/results").get_json()["results"])
        self.post("/api/step")
        self.assertIsNone(self.client.get("/api/results").get_json()["results"])

        self.run_to_end()
        results = self.client.get("/api/results").get_json()["results"]
        self.assertEqual(results["greedy"]["total_value"], 34)
        self.assertEqual(results["dp"]["total_value"], 34)
        self.assertTrue(results["greedy_optimal"])

    def test_capacity_clamped(self):
        data = self.post("/api/capacity", {"capacity": 50}).get_json()
        self.assertEqual(data["state"]["capacity"], 20)

    def test_add_and_remove_items(self):
        data = self.post("/api/items/add", {"name": "Gem", "weight": 3, "value": 9}).get_json()
        self.assertIn("Gem", data["playground"])
        self.post("/api/items/remove", {"id": "1"})
        data = self.client.get("/api/state").get_json()
        names = [i["name"] for i in data["state"]["greedy"]["overlay"]["order"]]
        self.assertNotIn("Laptop", names)
        self.assertIn("Gem", names)

    def test_update_item(self):
        data = self.post("/api/items/update", {"id": "4", "value": 40}).get_json()
        order = data["state"]["greedy"]["overlay"]["order"]
        # Water now has the best ratio
        self.assertEqual(order[0]["name"], "Water")

    def test_bad_input_is_400(self):
        self.assertEqual(self.post("/api/items/add", {"name": ""}).status_code, 400)
        self.assertEqual(self.post("/api/items/update", {"id": "zzz"}).status_code, 400)
        self.assertEqual(self.post("/api/capacity", {"capacity": "lots"}).status_code, 400)
        self.assertEqual(self.post("/api/config/speed", {"speed": "warp"}).status_code, 400)

    def test_config_locked_while_running(self):
        self.assertTrue(self.post("/api/run").get_json()["state"]["running"])
        self.assertEqual(self.post("/api/capacity", {"capacity": 12}).status_code, 409)
        self.assertEqual(self.post("/api/items/randomize").status_code, 409)

        self.assertFalse(self.post("/api/pause").get_json()["state"]["running"])
        self.assertEqual(self.post("/api/capacity", {"capacity": 12}).status_code, 200)

    def test_edit_resets_progress(self):
        self.post("/api/step")
        data = self.post("/api/items/randomize", {"seed": 3}).get_json()
        self.assertEqual(data["state"]["greedy"]["step_number"], 0)
        self.assertFalse(data["state"]["has_run"])

    def test_speed(self):
        data = self.post("/api/config/speed", {"speed_ms": 400}).get_json()
        self.assertAlmostEqual(data["greedy_interval"], 0.4)
        self.assertAlmostEqual(data["dp_interval"], 0.1)
        data = self.post("/api/config/speed", {"speed": "slow"}).get_json()
        self.assertAlmostEqual(data["greedy_interval"], 1.0)

    def test_reset(self):
        self.run_to_end()
        data = self.post("/api/reset").get_json()
        self.assertFalse(data["state"]["finished"])
        self.assertIsNone(self.client.get("/api/results").get_json()["results"])

    def test_tick_when_paused(self):
        data = self.post("/api/tick").get_json()
        self.assertEqual(data["advanced"], {"greedy": False, "dp": False})

    def test_duel_store_is_bounded(self):
        """Fresh sessions past the limit evict the least recently used duel"""
        with mock.patch.object(config, "MAX_DUELS", 3):
            keeper = main.app.test_client()
            self.assertEqual(keeper.post("/api/step").status_code, 200)
            for _ in range(10):
                main.app.test_client().get("/api/state")
                keeper.get("/api/state")
                self.assertLessEqual(len(main._DUELS), 3)
            state = keeper.get("/api/state").get_json()["state"]
        # the busy session kept its progress
        self.assertEqual(state["greedy"]["step_number"], 1)

    def test_trace(self):
        data = self.client.get("/api/trace").get_json()
        # reset frame + 2N + 1 advances for greedy, N(C+1) + N + 1 for dp
        self.assertEqual(len(data["greedy"]["steps"]), 1 + 2 * 5 + 1)
        self.assertEqual(len(data["dp"]["steps"]), 1 + 5 * 11 + 5 + 1)
        self.assertTrue(data["dp"]["metrics"]["agrees_with_reference"])
        self.assertEqual(data["comparison"]["dp"]["total_value"], 34)

    def test_randomize_seed_must_be_integer(self):
        for seed in ([1, 2], {"a": 1}, "7", True, 1.5):
            res = self.post("/api/items/randomize", {"seed": seed})
            self.assertEqual(res.status_code, 400, seed)
        self.assertEqual(self.post("/api/items/randomize", {"seed": 11}).status_code, 200)


if __name__ == "__main__":
    unittest.main()
