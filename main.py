# main.py
import argparse
import json
import logging
import sys

from config import EXIT_OK, INSTANCE_SUFFIX, PROFILE, SOLUTION_SUFFIX
from errors import UsageError, ValidatorError
from logging_config import setup_logging
from model import Profile
from model_parser import TimetableModel
from solution import Solution
from solution_parser import SolutionParser
from validator import Validator, ValidatorConfig

logger = logging.getLogger(__name__)

PROFILES = [profile.value for profile in Profile]


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser():
    p = ArgumentParser(prog="timvalidate",
                       description="Check a timetable solution (<basename>.sln) "
                                   "against its instance (<basename>.tim)")
    p.add_argument("basename", help="Path of the instance and solution files without suffix")
    p.add_argument("--profile", choices=PROFILES, default=PROFILE,
                   help="basic: rooms and clashes only; extended: also availability and ordering")
    p.add_argument("--json", action="store_true", help="Print the report as JSON")
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return p


def run(basename, profile, as_json=False):
    profile = Profile(profile)

    # === Load instance ===
    model = TimetableModel(profile)
    model.parse(basename + INSTANCE_SUFFIX)

    # === Load solution ===
    solution = Solution(model)
    SolutionParser().parse(basename + SOLUTION_SUFFIX, solution)

    # === Validate ===
    report = Validator(ValidatorConfig.for_profile(profile)).validate(model, solution)
    if as_json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(report.to_text())
    return report


def main(argv=None):
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        # argparse does not check defaults against choices
        if args.profile not in PROFILES:
            raise UsageError(f"invalid profile '{args.profile}' (choose from {', '.join(PROFILES)})")
        setup_logging(logging.DEBUG if args.verbose else None)
        run(args.basename, args.profile, as_json=args.json)
    except UsageError as exc:
        print(parser.format_usage().rstrip(), file=sys.stderr)
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    except ValidatorError as exc:
        logger.debug("Validation aborted", exc_info=True)
        print(exc, file=sys.stderr)
        return exc.exit_code
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
