"""Exception types raised at the edges of the engine.

The engine itself never raises into the turn loop; these are for the
boundaries (world documents coming off disk or out of a generator, and the
narration service).
"""


class EscapeRoomError(Exception):
    """Base class for all escape room errors."""


class WorldFormatError(EscapeRoomError):
    """A serialized world document could not be decoded."""


class NarrationError(EscapeRoomError):
    """The narration or scenario-generation service failed."""
