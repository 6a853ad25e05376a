"""
Hurdle Exceptions

Guess validation errors are recoverable: the game state is left untouched and
the message can be shown to the player as-is. Word-source errors are fatal for
the hurdle chain because no secret word can be produced.
"""


class HurdleError(Exception):
    """Base class for all game errors."""

    message = "Game error"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class GuessError(HurdleError):
    """A rejected guess. The attempt is not consumed."""

    message = "Invalid guess"


class NoActiveGameError(GuessError):
    message = "No game in progress. Start a new game first."


class GameOverError(GuessError):
    message = "Game is over. Start a new game!"


class EmptyInputError(GuessError):
    message = "Please enter a word"


class InvalidLengthError(GuessError):
    message = "Word must be exactly 5 letters"


class InvalidCharactersError(GuessError):
    message = "Guess must contain only letters"


class NotInDictionaryError(GuessError):
    message = "Not a valid word"


class AlreadyGuessedError(GuessError):
    message = "You have already guessed this word"


class HardModeViolationError(GuessError):
    message = "Guess does not use the revealed hints"


class HurdleModeError(HurdleError):
    """Hurdle chain operation called in the wrong state."""

    message = "Hurdle mode is not active"


class WordSourceUnavailableError(HurdleError):
    """No word source (external or local) can produce a word."""

    message = "No word source is available"


class DuplicateWordExhaustedError(HurdleError):
    """Every available word equals the previous answer."""

    message = "Could not find a word different from the previous answer"
