"""
Test cases for YAML configuration loading.
"""
import tempfile
import unittest
import sys
from pathlib import Path

import yaml

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from handcanvas.config import load_config, Cfg


class TestLoadConfig(unittest.TestCase):
    """Test the bundled defaults and custom config files."""

    def test_defaults(self):
        """Test that the bundled config loads with the expected values."""
        cfg = load_config()
        self.assertIsInstance(cfg, Cfg)
        self.assertEqual(cfg.classifier.extended_threshold, 0.3)
        self.assertEqual(cfg.classifier.pinch_threshold, 0.1)
        self.assertEqual(cfg.calibration.zone_px, 50)
        self.assertEqual(cfg.calibration.dwell_ms, 2000)
        self.assertEqual(cfg.controls.cooldown_ms, 500)
        self.assertEqual(len(cfg.controls.palette), 8)
        self.assertEqual((cfg.drawing.size_min, cfg.drawing.size_max), (1, 50))
        self.assertEqual(cfg.mediapipe.max_num_hands, 1)

    def test_missing_file(self):
        """Test that a missing config file raises."""
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/handcanvas.yaml")

    def test_custom_file(self):
        """Test loading an edited copy of the defaults."""
        default_path = Path(__file__).parent.parent / "handcanvas" / "config.default.yaml"
        with open(default_path) as f:
            data = yaml.safe_load(f)
        data['controls']['cooldown_ms'] = 250
        data['display']['canvas_width'] = 640

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "custom.yaml"
            with open(path, 'w') as f:
                yaml.safe_dump(data, f)
            cfg = load_config(str(path))

        self.assertEqual(cfg.controls.cooldown_ms, 250)
        self.assertEqual(cfg.display.canvas_width, 640)

    def test_missing_section(self):
        """Test that a config without a required section is rejected."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.yaml"
            with open(path, 'w') as f:
                yaml.safe_dump({'camera': {'index': 0}}, f)
            with self.assertRaises(KeyError):
                load_config(str(path))


if __name__ == '__main__':
    unittest.main()
