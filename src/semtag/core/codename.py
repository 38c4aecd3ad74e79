"""Release codenames such as ``brave-otter``."""

from __future__ import annotations

import random

ADJECTIVES = (
    "agile", "amber", "ancient", "autumn", "bold", "brave", "bright", "calm",
    "clever", "cosmic", "crimson", "curious", "daring", "dusty", "eager", "electric",
    "fearless", "fierce", "gentle", "giant", "golden", "happy", "hidden", "humble",
    "icy", "jolly", "keen", "lively", "lucky", "lunar", "mighty", "misty",
    "nimble", "noble", "polar", "proud", "quiet", "rapid", "restless", "rustic",
    "silent", "silver", "sleepy", "solar", "steady", "stormy", "swift", "tidy",
    "velvet", "vivid", "wandering", "wild", "wise", "witty", "young", "zesty",
)  # fmt: skip

ANIMALS = (
    "albatross", "antelope", "badger", "beaver", "bison", "buffalo", "camel", "cheetah",
    "cobra", "condor", "coyote", "crane", "dolphin", "eagle", "falcon", "ferret",
    "gazelle", "gecko", "heron", "hedgehog", "ibis", "jaguar", "koala", "lemur",
    "leopard", "lynx", "mamba", "marmot", "meerkat", "moose", "narwhal", "ocelot",
    "octopus", "orca", "otter", "owl", "panda", "panther", "pelican", "puffin",
    "quokka", "raven", "salamander", "seal", "sparrow", "tapir", "tiger", "toucan",
    "walrus", "weasel", "wolf", "wombat", "yak", "zebra",
)  # fmt: skip


def generate_codename(rng: random.Random | None = None) -> str:
    """Return a random lower-case ``adjective-animal`` pair."""
    choice = (rng or random).choice
    return f"{choice(ADJECTIVES)}-{choice(ANIMALS)}"
