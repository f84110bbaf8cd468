import random
import threading
from typing import Dict, Optional, Set

from claimgrid.models import Identity


ADJECTIVES = [
    'Swift', 'Bold', 'Calm', 'Dark', 'Epic', 'Fast', 'Grim', 'Hazy',
    'Icy', 'Jade', 'Keen', 'Loud', 'Mint', 'Neon', 'Pale', 'Quick',
    'Red', 'Sly', 'Tiny', 'Vast', 'Wild', 'Zany', 'Aqua', 'Blaze',
    'Crisp', 'Dusk', 'Ember', 'Frost', 'Gold', 'Hex', 'Iron', 'Jet',
    'Kiwi', 'Lime', 'Moss', 'Nova', 'Onyx', 'Pine', 'Quartz', 'Rust',
    'Storm', 'Tidal', 'Ultra', 'Vivid', 'Warm', 'Xenon', 'Yogi', 'Zen',
    'Brave', 'Coral', 'Delta', 'Fern', 'Gleam', 'Hyper',
]

ANIMALS = [
    'Fox', 'Wolf', 'Bear', 'Hawk', 'Lynx', 'Puma', 'Crow', 'Deer',
    'Elk', 'Frog', 'Goat', 'Hare', 'Ibis', 'Jay', 'Koi', 'Lion',
    'Mole', 'Newt', 'Owl', 'Pike', 'Ram', 'Seal', 'Toad', 'Vole',
    'Wren', 'Yak', 'Ant', 'Bat', 'Cat', 'Dog', 'Eel', 'Fly',
    'Gnu', 'Hen', 'Imp', 'Kite', 'Lark', 'Moth', 'Oryx', 'Pug',
    'Quail', 'Ray', 'Swan', 'Tern', 'Urchin', 'Viper', 'Wasp', 'Zebra',
    'Cobra', 'Drake', 'Eagle', 'Finch', 'Gecko', 'Hippo',
]

GOLDEN_ANGLE = 137.50776405
DEFAULT_NAME_ATTEMPTS = 50


def hue_color(counter: int) -> str:
    hue = (counter * GOLDEN_ANGLE) % 360
    return f"hsl({int(hue + 0.5) % 360}, 72%, 58%)"


class IdentityRegistry:
    """Hands out display names and colors and tracks who is online.

    Names are reserved in ``_used_names`` when issued. Unless
    ``release_names`` is set the reservation outlives the session, so a
    long-running server drifts toward suffixed fallback names.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 max_attempts: int = DEFAULT_NAME_ATTEMPTS,
                 release_names: bool = False):
        self._rng = rng or random.Random()
        self.max_attempts = max_attempts
        self.release_names = release_names
        self._lock = threading.Lock()
        self._sessions: Dict[str, Identity] = {}
        self._used_names: Set[str] = set()
        self._hue_counter = 0

    def _word_pair(self) -> str:
        return f"{self._rng.choice(ADJECTIVES)} {self._rng.choice(ANIMALS)}"

    def _generate_name(self) -> str:
        for _ in range(self.max_attempts):
            name = self._word_pair()
            if name not in self._used_names:
                return name
        # fallback: widen the numeric suffix until something is free
        digits = 2
        while True:
            for _ in range(self.max_attempts):
                name = f"{self._word_pair()} {self._rng.randrange(10 ** digits)}"
                if name not in self._used_names:
                    return name
            digits += 1

    def _generate_color(self) -> str:
        color = hue_color(self._hue_counter)
        self._hue_counter += 1
        return color

    def assign(self, session_id: str) -> Identity:
        with self._lock:
            identity = Identity(name=self._generate_name(), color=self._generate_color())
            self._used_names.add(identity.name)
            self._sessions[session_id] = identity
            return identity

    def release(self, session_id: str) -> Optional[Identity]:
        with self._lock:
            identity = self._sessions.pop(session_id, None)
            if identity is not None and self.release_names:
                self._used_names.discard(identity.name)
            return identity

    def lookup(self, session_id: str) -> Optional[Identity]:
        with self._lock:
            return self._sessions.get(session_id)

    def online_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _is_reserved(self, name: str) -> bool:
        with self._lock:
            return name in self._used_names
