"""Turn raw player input into a normalized command.

interpret("use the matches on candle") gives
Command(verb="use", target="the matches", modifier="candle").
"""

from dataclasses import dataclass

VERB_ALIASES = {
    **dict.fromkeys(("look", "examine"), "look"),
    **dict.fromkeys(("take", "get", "pick"), "take"),
    **dict.fromkeys(("go", "move", "walk"), "go"),
    **dict.fromkeys(("inventory", "inv", "i"), "inventory"),
    "use": "use",
    "solve": "solve",
    "hint": "hint",
}

# Checked in order; the first separator present splits the use target.
COMBINATION_SEPARATORS = (" with ", " on ")


@dataclass(frozen=True)
class Command:
    verb: str
    target: str = ""
    modifier: str = ""
    raw: str = ""

    @property
    def is_combination(self) -> bool:
        return bool(self.modifier)


def split_combination(text: str) -> tuple[str, str]:
    """Split "X with Y" / "X on Y" into (X, Y). Y is empty if neither is used."""
    for separator in COMBINATION_SEPARATORS:
        if separator in text:
            primary, _, secondary = text.partition(separator)
            return primary.strip(), secondary.strip()
    return text, ""


def interpret(raw_input: str) -> Command:
    """Tokenize and normalize a line of input. Callers skip blank lines."""
    words = raw_input.strip().lower().split()
    if not words:
        return Command(verb="", raw=raw_input)

    word = words[0]
    verb = VERB_ALIASES.get(word, word)
    rest = words[1:]

    if word == "pick" and rest and rest[0] == "up":
        rest = rest[1:]

    target = " ".join(rest)
    modifier = ""
    if verb == "use":
        target, modifier = split_combination(target)

    return Command(verb=verb, target=target, modifier=modifier, raw=raw_input)
