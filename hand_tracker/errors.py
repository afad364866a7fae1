class MalformedInputError(ValueError):
    """The input is not recognizable as a PokerNow log export."""


class PokerLogWarning(UserWarning):
    """Base for non-fatal conditions reported alongside a parse result."""


class NoHandsFoundWarning(PokerLogWarning):
    pass


class HeroUndeterminedWarning(PokerLogWarning):
    pass
