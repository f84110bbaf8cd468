import random

from claimgrid.services.identity import ADJECTIVES, ANIMALS, IdentityRegistry, hue_color


def test_assign_binds_session():
    registry = IdentityRegistry(rng=random.Random(1))
    identity = registry.assign('sid-1')
    adjective, animal = identity.name.split(' ')
    assert adjective in ADJECTIVES
    assert animal in ANIMALS
    assert registry.lookup('sid-1') == identity
    assert registry.online_count() == 1
    assert identity.to_dict() == {'name': identity.name, 'color': identity.color}


def test_colors_follow_golden_angle():
    registry = IdentityRegistry(rng=random.Random(2))
    colors = [registry.assign(f"sid-{i}").color for i in range(4)]
    assert colors == [
        'hsl(0, 72%, 58%)',
        'hsl(138, 72%, 58%)',
        'hsl(275, 72%, 58%)',
        'hsl(53, 72%, 58%)',
    ]
    assert hue_color(0) == colors[0]


def test_color_counter_advances_even_after_release():
    registry = IdentityRegistry(rng=random.Random(3))
    registry.assign('a')
    registry.release('a')
    assert registry.assign('b').color == hue_color(1)


def test_online_names_are_distinct():
    registry = IdentityRegistry(rng=random.Random(4))
    names = {registry.assign(f"sid-{i}").name for i in range(300)}
    assert len(names) == 300
    assert registry.online_count() == 300


def test_release_keeps_name_reserved_by_default():
    registry = IdentityRegistry(rng=random.Random(5))
    identity = registry.assign('sid-1')
    assert registry.release('sid-1') == identity
    assert registry.lookup('sid-1') is None
    assert registry.online_count() == 0
    assert registry._is_reserved(identity.name)


def test_release_names_option_frees_name():
    registry = IdentityRegistry(rng=random.Random(5), release_names=True)
    identity = registry.assign('sid-1')
    registry.release('sid-1')
    assert not registry._is_reserved(identity.name)


def test_release_unknown_session():
    registry = IdentityRegistry()
    assert registry.release('missing') is None


class _FixedChoice(random.Random):
    """Always draws the first word, so every plain pair collides."""

    def choice(self, seq):
        return seq[0]


def test_fallback_appends_numeric_suffix():
    registry = IdentityRegistry(rng=_FixedChoice(6), max_attempts=5)
    first = registry.assign('sid-1')
    assert first.name == 'Swift Fox'
    second = registry.assign('sid-2')
    assert second.name.startswith('Swift Fox ')
    assert second.name.rsplit(' ', 1)[1].isdigit()


def test_fallback_never_repeats_a_name():
    registry = IdentityRegistry(rng=_FixedChoice(7), max_attempts=3)
    names = [registry.assign(f"sid-{i}").name for i in range(150)]
    assert len(set(names)) == 150
