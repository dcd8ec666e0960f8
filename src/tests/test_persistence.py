import json
import os
import shutil
import tempfile
import unittest

from stories_tui import config
from stories_tui.persistence import SemiPersistentValue, load_state_file


class TestSemiPersistentValue(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp(prefix="test_stories_state_")
        self.state_path = os.path.join(self.test_dir, "stories", "state.json")

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_default_when_file_is_missing(self):
        value = SemiPersistentValue("search", "React", path=self.state_path)
        self.assertEqual(value.value, "React")
        self.assertFalse(os.path.exists(self.state_path))

    def test_value_survives_restart(self):
        SemiPersistentValue("search", path=self.state_path).save("rust")

        restarted = SemiPersistentValue("search", path=self.state_path)
        self.assertEqual(restarted.value, "rust")
        self.assertEqual(restarted.load(), "rust")

    def test_other_keys_are_preserved(self):
        os.makedirs(os.path.dirname(self.state_path))
        with open(self.state_path, "w") as f:
            json.dump({"other": "keep me"}, f)

        SemiPersistentValue("search", path=self.state_path).save("python")

        self.assertEqual(
            load_state_file(self.state_path), {"other": "keep me", "search": "python"}
        )

    def test_corrupt_file_falls_back_to_default(self):
        os.makedirs(os.path.dirname(self.state_path))
        with open(self.state_path, "w") as f:
            f.write("{not json")

        value = SemiPersistentValue("search", "fallback", path=self.state_path)
        self.assertEqual(value.value, "fallback")

    def test_non_string_value_falls_back_to_default(self):
        os.makedirs(os.path.dirname(self.state_path))
        with open(self.state_path, "w") as f:
            json.dump({"search": 42}, f)

        value = SemiPersistentValue("search", "fallback", path=self.state_path)
        self.assertEqual(value.value, "fallback")


class TestConfigLoading(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp(prefix="test_stories_config_")
        self.config_path = os.path.join(self.test_dir, "config.json")

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_default_config_is_written(self):
        loaded = config.load_config(self.config_path)

        self.assertTrue(os.path.exists(self.config_path))
        self.assertEqual(loaded, config.DEFAULT_CONFIG)

    def test_user_values_override_defaults(self):
        with open(self.config_path, "w") as f:
            json.dump({"history_limit": 10, "theme": "nord"}, f)

        loaded = config.load_config(self.config_path)

        self.assertEqual(loaded["history_limit"], 10)
        self.assertEqual(loaded["theme"], "nord")
        self.assertTrue(loaded["discard_stale_responses"])

    def test_save_config_round_trips(self):
        config.save_config({"theme": "gruvbox"}, self.config_path)
        self.assertEqual(config.load_config(self.config_path)["theme"], "gruvbox")


if __name__ == "__main__":
    unittest.main()
