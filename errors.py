from config import (EXIT_USAGE, EXIT_FILE_NOT_FOUND,
                    EXIT_MALFORMED_INSTANCE, EXIT_MALFORMED_SOLUTION)


class ValidatorError(Exception):
    """Base class for failures that stop a validation run."""
    exit_code = 1


class UsageError(ValidatorError):
    exit_code = EXIT_USAGE


class InputFileNotFound(ValidatorError):
    exit_code = EXIT_FILE_NOT_FOUND

    def __init__(self, filename):
        super().__init__(f"Couldn't open the file {filename}")
        self.filename = filename


class MalformedInstance(ValidatorError):
    exit_code = EXIT_MALFORMED_INSTANCE


class MalformedSolution(ValidatorError):
    exit_code = EXIT_MALFORMED_SOLUTION
