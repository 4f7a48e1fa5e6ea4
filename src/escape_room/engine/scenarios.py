"""The built-in scenario, used whenever no generated world is available."""

import random

from .world import (
    Action,
    ActionCondition,
    ActionEffect,
    ActionTrigger,
    HintTrigger,
    Item,
    ProgressiveHint,
    Puzzle,
    Room,
    World,
)

THEMES = [
    "Haunted Victorian Mansion",
    "Abandoned Space Station",
    "Ancient Egyptian Tomb",
    "Mad Scientist's Laboratory",
    "Pirate Ship",
    "Time Machine Malfunction",
    "Zombie Apocalypse Bunker",
    "Magic Academy",
    "Bank Heist Gone Wrong",
    "Underwater Research Base",
]


def random_theme(rng: random.Random | None = None) -> str:
    return (rng or random).choice(THEMES)


def _rooms() -> list[Room]:
    return [
        Room(
            id="study",
            name="Uncle's Study",
            description=(
                "A cosy study crammed with your uncle's collections. Bookshelves "
                "of leather-bound volumes cover the walls. A mahogany desk sits "
                "in the middle, buried under papers, a brass compass and an ornate "
                "letter opener. A grandfather clock ticks in the corner and a "
                "large painting of a sailing ship hangs over the fireplace. The "
                "door you came in by won't budge; there must be another way out."
            ),
            items=["compass", "letter_opener", "ship_painting", "loose_book", "desk_drawer"],
            puzzles=["painting_puzzle", "clock_puzzle"],
            exits=["hidden_passage"],
        ),
        Room(
            id="hidden_passage",
            name="Hidden Passage",
            description=(
                "A narrow stone passage behind the bookshelf, lit by guttering "
                "torches. Nautical symbols and star charts are carved into the "
                "walls. At the far end waits a treasure chest fitted with several "
                "locks, and beside it a door bearing your family's crest."
            ),
            items=["treasure_map", "family_letter", "gold_coins"],
            puzzles=["treasure_chest"],
            exits=["victory"],
            locked=True,
            unlock_key="solved_puzzles",
        ),
        Room(
            id="victory",
            name="Freedom and Fortune",
            description=(
                "You step out into the garden and breathe the fresh air, holding "
                "your uncle's last gift: his treasure, and proof that you were "
                "clever enough to earn it."
            ),
        ),
    ]


def _items() -> list[Item]:
    return [
        Item(
            id="compass",
            name="brass compass",
            description=(
                "An antique brass compass covered in engravings. Turning it, you "
                "notice extra markings around the rim; it is more than a "
                "navigation tool."
            ),
            usable=True,
        ),
        Item(
            id="letter_opener",
            name="ornate letter opener",
            description=(
                "A silver letter opener with the family crest on its handle. "
                "Sharp, well made, and clearly precious to your uncle."
            ),
            usable=True,
        ),
        Item(
            id="ship_painting",
            name="ship painting",
            description=(
                "An oil painting of a three-masted ship in a storm. The frame is "
                "heavy and ornate, and the painting doesn't sit quite flush "
                "against the wall."
            ),
        ),
        Item(
            id="loose_book",
            name="leather journal",
            description=(
                "A worn leather journal that was poking out of the bookshelf. It "
                "holds your uncle's notes on 'the family legacy', compass "
                "sketches, star charts and a plan of this very house."
            ),
            usable=True,
            hidden=True,
            revealed_by="examine_books",
        ),
        Item(
            id="desk_drawer",
            name="mysterious key",
            description=(
                "A heavy key of dark metal with astronomical symbols etched "
                "along its shaft. It was made for something important."
            ),
            usable=True,
            hidden=True,
            revealed_by="examine_desk",
        ),
        Item(
            id="solved_puzzles",
            name="knowledge",
            description="Your grasp of your uncle's puzzles. It opens the way forward.",
            usable=True,
            hidden=True,
        ),
        Item(
            id="treasure_map",
            name="treasure map",
            description=(
                "A genuine treasure map of scattered islands with an X marked "
                "on one of them. Collectors would pay a fortune for it."
            ),
        ),
        Item(
            id="family_letter",
            name="family letter",
            description=(
                "A letter from your uncle: 'My dear heir, if you are reading this "
                "you have proven yourself worthy of the family treasure. Spend it "
                "wisely, and remember the puzzles were the real treasure.'"
            ),
        ),
        Item(
            id="gold_coins",
            name="gold coins",
            description="A pile of Spanish doubloons and other antique coins. The treasure is real!",
        ),
    ]


def _puzzles() -> list[Puzzle]:
    return [
        Puzzle(
            id="painting_puzzle",
            name="The Ship's Secret",
            description=(
                "The ship painting isn't flush with the wall. Something could "
                "lever it aside."
            ),
            solution="move painting",
            required_items=["letter_opener"],
            reward=(
                "You ease the painting aside with the letter opener. Behind it "
                "is a hidden panel carved with a compass rose!"
            ),
        ),
        Puzzle(
            id="clock_puzzle",
            name="Time and Direction",
            description=(
                "The grandfather clock and the compass rose behind the painting "
                "seem related. The journal speaks of 'when the clock points north'."
            ),
            solution="twelve",
            required_items=["compass", "loose_book"],
            reward=(
                "Twelve o'clock is north! You set the hands to twelve and hear "
                "machinery grinding behind the bookshelf."
            ),
        ),
        Puzzle(
            id="treasure_chest",
            name="Uncle's Legacy",
            description=(
                "A chest bearing the family crest with three keyholes. You have "
                "only found one key; the other locks respond to something else."
            ),
            solution="use key and compass",
            required_items=["desk_drawer", "compass"],
            reward=(
                "The mysterious key fits perfectly, and the compass settles into "
                "a hollow in the lid to complete the mechanism. The chest opens "
                "on maps, gold and your uncle's final letter."
            ),
        ),
    ]


def _actions() -> list[Action]:
    return [
        Action(
            id="examine_desk",
            trigger=ActionTrigger(type="examine", target="desk"),
            effects=[ActionEffect(type="reveal_item", target="desk_drawer")],
            message=(
                "You rummage through the desk. Most drawers are locked, but one "
                "slides open on an unusual dark metal key covered in astronomical "
                "symbols."
            ),
            one_time_only=True,
        ),
        Action(
            id="examine_books",
            trigger=ActionTrigger(type="examine", target="bookshel"),
            effects=[ActionEffect(type="reveal_item", target="loose_book")],
            message=(
                "Scanning the shelves, you spot a leather journal sticking out. "
                "Inside are your uncle's notes on the 'family legacy' and "
                "detailed sketches."
            ),
            one_time_only=True,
        ),
        Action(
            id="move_painting",
            trigger=ActionTrigger(type="use_with", target="letter_opener", with_="painting"),
            conditions=[ActionCondition(type="has_item", value="letter_opener")],
            effects=[ActionEffect(type="add_inventory", target="solved_puzzles")],
            message=(
                "You pry the painting aside with the letter opener. Carved into "
                "the wood behind it is an intricate compass rose!"
            ),
            one_time_only=True,
        ),
        Action(
            id="solve_clock",
            trigger=ActionTrigger(type="use_with", target="compass", with_="clock"),
            conditions=[
                ActionCondition(type="has_item", value="loose_book"),
                ActionCondition(type="puzzle_solved", value="painting_puzzle"),
            ],
            effects=[ActionEffect(type="unlock_room", target="hidden_passage")],
            message=(
                "Following the journal, you line twelve o'clock up with north on "
                "the compass rose. With a grinding noise the bookshelf swings "
                "aside to reveal a hidden passage!"
            ),
            one_time_only=True,
        ),
    ]


def _progressive_hints() -> list[ProgressiveHint]:
    return [
        ProgressiveHint(
            context="study",
            triggers=[HintTrigger(type="commands_tried", threshold=3)],
            hint_text=(
                "Your uncle was methodical. Start with the obvious: his desk, "
                "the bookshelves and that painting."
            ),
            priority=1,
        ),
        ProgressiveHint(
            context="study",
            triggers=[HintTrigger(type="commands_tried", threshold=7)],
            hint_text=(
                "The ship painting looks like it could be moved, and a letter "
                "opener is good for more than letters."
            ),
            priority=2,
        ),
        ProgressiveHint(
            context="study",
            triggers=[HintTrigger(type="commands_tried", threshold=12)],
            hint_text=(
                "The compass, the journal and the clock belong together. How do "
                "clock faces and compass points line up?"
            ),
            priority=3,
        ),
        ProgressiveHint(
            context="painting_puzzle",
            triggers=[HintTrigger(type="failed_attempts", threshold=2)],
            hint_text="The painting isn't flush with the wall. A tool could move it aside.",
            priority=4,
        ),
        ProgressiveHint(
            context="clock_puzzle",
            triggers=[HintTrigger(type="failed_attempts", threshold=2)],
            hint_text="On a compass, north sits where twelve is on a clock.",
            priority=5,
        ),
    ]


def default_scenario(theme: str = "") -> World:
    """A fresh copy of the uncle's study scenario."""
    return World(
        theme=theme or "Uncle's Study",
        setting="Your late uncle's study",
        backstory=(
            "You have inherited your eccentric uncle's house. The study door "
            "slammed shut behind you and will not open. Your uncle loved clever "
            "puzzles and hidden treasure; there must be a way out that leads to "
            "whatever he left you."
        ),
        rooms=_rooms(),
        items=_items(),
        puzzles=_puzzles(),
        actions=_actions(),
        win_condition=(
            "Find your uncle's clues, solve his puzzles and claim the family treasure."
        ),
        hints={
            "study": (
                "Your uncle hid clues all over the study. The desk, the "
                "bookshelves, the painting and the grandfather clock all matter. "
                "Examine them closely."
            ),
            "hidden_passage": (
                "You found the secret chamber! The chest needs the mysterious key "
                "and one more thing to complete its mechanism."
            ),
        },
        progressive_hints=_progressive_hints(),
    )
