import logging

from errors import InputFileNotFound, MalformedSolution
from token_stream import TokenStream

logger = logging.getLogger(__name__)


class SolutionParser:
    def parse(self, filename, solution):
        try:
            with open(filename, 'r') as f:
                text = f.read()
        except UnicodeDecodeError as exc:
            raise MalformedSolution(f"{filename}: not a text file ({exc.reason} at byte {exc.start})") from None
        except OSError:
            raise InputFileNotFound(filename) from None
        self.parse_text(text, solution, source=str(filename))

    def parse_text(self, text, solution, source="<solution>"):
        tokens = TokenStream(text, MalformedSolution, source)
        pairs = tokens.take_ints(2 * solution.E, "event slot/room pairs").reshape(solution.E, 2)

        for e, (slot, room) in enumerate(pairs.tolist()):
            try:
                solution.assign_event(e, slot, room)
            except IndexError as exc:
                raise MalformedSolution(f"{source}: event {e}: {exc}") from None

        if tokens.remaining:
            logger.debug("%s: ignoring %d trailing tokens", source, tokens.remaining)

        solution.freeze()
        logger.info("Solution %s loaded: %d of %d events have a slot",
                    source, int(solution.slotted_mask().sum()), solution.E)
