import argparse
import unittest
from unittest.mock import MagicMock, patch

import main
from core.exceptions import RequirementNotFoundError


class TestCliParsing(unittest.TestCase):

    def test_overrides(self):
        self.assertEqual(
            main._parse_overrides(["filterSkillsExclude=PHP,Perl", " filterNoticePeriod = 30 "]),
            {"filterSkillsExclude": "PHP,Perl", "filterNoticePeriod": "30"},
        )
        self.assertEqual(main._parse_overrides(None), {})

    def test_override_without_value_rejected(self):
        with self.assertRaises(argparse.ArgumentTypeError):
            main._parse_overrides(["filterSkillsExclude"])

    def test_batch_arguments(self):
        args = main.build_parser().parse_args(["batch", "7", "1", "2", "3"])
        self.assertEqual(args.requirement, 7)
        self.assertEqual(args.candidates, [1, 2, 3])
        self.assertIs(args.func, main.cmd_batch)

    def test_search_arguments(self):
        args = main.build_parser().parse_args(
            ["search", "7", "--filter", "filterSkillsExclude=PHP", "--limit", "10"]
        )
        self.assertEqual(args.filter, ["filterSkillsExclude=PHP"])
        self.assertEqual(args.limit, 10)
        self.assertEqual(args.offset, 0)


class TestMain(unittest.TestCase):

    @patch("main.AppContext")
    @patch("main.load_config")
    def test_matching_error_exit_code(self, mock_load_config, mock_context):
        mock_load_config.return_value.logging.level = "INFO"
        ctx = MagicMock()
        ctx.ats_service.score_candidate.side_effect = RequirementNotFoundError(99)
        mock_context.build.return_value = ctx

        self.assertEqual(main.main(["score", "1", "99"]), 2)
        mock_context.build.assert_called_once_with(mock_load_config.return_value, bind_database=True)

    @patch("main.AppContext")
    @patch("main.load_config")
    def test_show_missing_score(self, mock_load_config, mock_context):
        mock_load_config.return_value.logging.level = "INFO"
        ctx = MagicMock()
        ctx.ats_service.get_score.return_value = None
        mock_context.build.return_value = ctx

        self.assertEqual(main.main(["show", "1", "7"]), 1)


if __name__ == '__main__':
    unittest.main()
