import sys
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch
from datetime import datetime
from io import StringIO

import pytz

# Add the parent directory to sys.path to import the calgrid package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from calgrid.__main__ import main, calendar_interface, build_context, ConsoleObserver
from calgrid.errors import ConfigurationError
from calgrid.utils.file_utils import write_markdown


def utc(*args):
    return pytz.utc.localize(datetime(*args))


class TestCalgridCli(unittest.TestCase):
    """Test the command line interface."""

    def setUp(self):
        """Set up test fixtures."""
        self.env_patcher = patch.dict('os.environ', {
            'CALGRID_TIMEZONE': 'UTC',
            'CALGRID_WEEK_START': '6',
            'CALGRID_MODE': 'month'
        })
        self.env_patcher.start()
        self.load_env_patcher = patch('calgrid.__main__.load_environment')
        self.load_env_patcher.start()
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Tear down test fixtures."""
        self.load_env_patcher.stop()
        self.env_patcher.stop()
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    @patch('sys.stdout', new_callable=StringIO)
    def test_month_grid(self, mock_stdout):
        main(["--date", "2024-02-15"])
        output = mock_stdout.getvalue()
        self.assertIn("### February 2024:", output)
        self.assertIn("(28)", output)
        self.assertLess(output.index("Sun"), output.index("Mon"))

    @patch('sys.stdout', new_callable=StringIO)
    def test_week_mode_with_navigation(self, mock_stdout):
        main(["--date", "2024-02-15", "--mode", "week", "--next", "2"])
        self.assertIn("### Week 2024-02-25 to 2024-03-02:", mock_stdout.getvalue())

    @patch('sys.stdout', new_callable=StringIO)
    def test_previous_month_clamps(self, mock_stdout):
        calendar = calendar_interface("2024-03-31", steps=-1)
        self.assertEqual(calendar.current_date, utc(2024, 2, 29))
        self.assertIn("### February 2024:", mock_stdout.getvalue())

    @patch('sys.stdout', new_callable=StringIO)
    def test_selection_and_summary(self, mock_stdout):
        calendar = calendar_interface("2024-02-15", select_str="2024-02-20", info=True)
        output = mock_stdout.getvalue()
        self.assertEqual(calendar.selected_date, utc(2024, 2, 20))
        self.assertIn("20*", output)
        self.assertIn("### Summary February 2024:", output)

    @patch('sys.stdout', new_callable=StringIO)
    def test_week_start_from_environment(self, mock_stdout):
        with patch.dict('os.environ', {'CALGRID_WEEK_START': '0'}):
            main(["--date", "2024-02-15"])
        output = mock_stdout.getvalue()
        self.assertLess(output.index("Mon"), output.index("Sun"))

    @patch('sys.stdout', new_callable=StringIO)
    def test_flags_override_environment(self, mock_stdout):
        with patch.dict('os.environ', {'CALGRID_MODE': 'week'}):
            calendar = calendar_interface("2024-02-15", mode="month", week_start=0, tz_name="Europe/Berlin")
        self.assertEqual(calendar.get_number_of_items_for_current_mode(), 35)
        self.assertEqual(calendar.context.first_weekday, 0)
        self.assertEqual(calendar.context.timezone_name, "Europe/Berlin")

    def test_build_context_rejects_bad_settings(self):
        with patch.dict('os.environ', {'CALGRID_WEEK_START': 'sunday'}):
            with self.assertRaises(ConfigurationError):
                build_context()
        with self.assertRaises(ConfigurationError):
            build_context(tz_name="Nowhere/City")

    @patch('sys.stdout', new_callable=StringIO)
    def test_invalid_input_exits_with_error(self, mock_stdout):
        test_cases = [
            ["--date", "2024-13-01"],
            ["--date", "2024-02-15", "--select", "tomorrow"],
            ["--tz", "Nowhere/City"],
        ]
        for argv in test_cases:
            with self.subTest(argv=argv):
                with self.assertRaises(SystemExit) as cm:
                    main(argv)
                self.assertEqual(cm.exception.code, 2)
        self.assertIn("[ERROR]", mock_stdout.getvalue())

    @patch('calgrid.__main__.logging.basicConfig')
    @patch('sys.stdout', new_callable=StringIO)
    def test_verbose_prints_notifications(self, mock_stdout, mock_basic_config):
        main(["--date", "2024-02-15", "--next", "1", "--select", "2024-03-05", "-v"])
        output = mock_stdout.getvalue()
        self.assertIn("[INFO] Grid: (Sun)2024-01-28 → (Sat)2024-03-02 (35 days)", output)
        self.assertIn("[INFO] Grid: (Sun)2024-02-25 → (Sat)2024-04-06 (42 days)", output)
        self.assertIn("[INFO] Selected: (Tue)2024-03-05", output)
        mock_basic_config.assert_called_once()

    def test_console_observer_counts(self):
        stream = StringIO()
        observer = ConsoleObserver(stream)
        with patch('sys.stdout', new_callable=StringIO):
            calendar = calendar_interface("2024-02-15")
        observer.on_display_dates_changed(calendar.dates, calendar)
        observer.on_selected_date_changed(utc(2024, 2, 1), calendar)
        self.assertEqual((observer.grid_updates, observer.selection_updates), (1, 1))
        self.assertIn("(Thu)2024-02-01", stream.getvalue())

    @patch('sys.stdout', new_callable=StringIO)
    def test_markdown_export(self, mock_stdout):
        md_path = os.path.join(self.tmp_dir, "calendar.md")
        main(["--date", "2024-02-15", "--md", md_path])
        main(["--date", "2024-02-15", "--next", "1", "--md", md_path])
        with open(md_path, encoding='utf-8') as f:
            content = f.read()
        self.assertTrue(content.startswith("# Calendar February 2024"))
        self.assertIn("### March 2024:", content)
        self.assertEqual(content.count("# Calendar"), 1)
        output = mock_stdout.getvalue()
        self.assertIn("[SUCCESS] Markdown output written", output)
        self.assertIn("Appending output", output)

        main(["--date", "2024-02-15", "--next", "1", "--md", md_path, "--overwrite"])
        with open(md_path, encoding='utf-8') as f:
            self.assertTrue(f.read().startswith("# Calendar March 2024"))

    @patch('sys.stdout', new_callable=StringIO)
    def test_markdown_without_table_is_not_written(self, mock_stdout):
        md_path = os.path.join(self.tmp_dir, "notes.md")
        with self.assertRaises(SystemExit) as cm:
            write_markdown(md_path, "Just a line of text", "February 2024")
        self.assertEqual(cm.exception.code, 3)
        self.assertFalse(os.path.exists(md_path))
        self.assertIn("[ERROR]", mock_stdout.getvalue())

    @patch('sys.stdout', new_callable=StringIO)
    def test_csv_export(self, mock_stdout):
        prefix = os.path.join(self.tmp_dir, "feb")
        main(["--date", "2024-02-15", "--csv", prefix, "--info"])
        with open(f"{prefix}_grid.csv", encoding='utf-8') as f:
            lines = f.read().splitlines()
        self.assertEqual(lines[0], "#,Date,Weekday,Week,In Month,Selected,Today")
        self.assertEqual(len(lines), 36)
        self.assertEqual(lines[1], "0,2024-01-28,Sun,0,no,no,no")
        self.assertTrue(os.path.exists(f"{prefix}_summary.csv"))


if __name__ == '__main__':
    unittest.main()
