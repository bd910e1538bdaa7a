import pytest

from stylist.aggregator import attribute_lines, count_dialogues, recount
from stylist.characters import Character, CharacterSet
from stylist.matcher import match_speaker
from stylist.script_parser import parse_script

SCRIPT = parse_script("SUNITA: Hello there!\nAMIT: Who is speaking?\nSUNITA: It's me.")


def _chars(*names):
    return CharacterSet(Character(n, 0.9) for n in names)


def test_end_to_end_counts_and_attribution():
    chars = _chars("SUNITA", "AMIT")
    assert count_dialogues(SCRIPT, chars) == {"SUNITA": 2, "AMIT": 1}
    assert [c.name for c in attribute_lines(SCRIPT, chars)] == ["SUNITA", "AMIT", "SUNITA"]


def test_silent_characters_are_reported_with_zero():
    assert count_dialogues(SCRIPT, _chars("SUNITA", "RAVI"))["RAVI"] == 0


def test_empty_character_set_yields_empty_mapping():
    assert count_dialogues(SCRIPT, CharacterSet()) == {}


def test_attribution_has_one_entry_per_line():
    script = parse_script("JOHN: hi\n\nThe door opens.\nMARY: hello")
    result = attribute_lines(script, _chars("JOHN", "MARY"))
    assert [c.name if c else None for c in result] == ["JOHN", None, None, "MARY"]


@pytest.mark.parametrize(
    "text, names",
    [
        ("KAMLA DEVI: a\nKAMLA: b\nKAMLA DEVI: c\n\nnarration", ("KAMLA", "KAMLA DEVI")),
        ("CHARACTER A: x\nCHARACTER AB: y\n\n", ("CHARACTER A", "CHARACTER AB")),
        ("nobody speaks\nat all", ("JOHN",)),
    ],
)
def test_counts_conserve_matched_lines(text, names):
    script = parse_script(text)
    chars = _chars(*names)
    counts = count_dialogues(script, chars)
    matched = sum(1 for line in script if match_speaker(line, chars) is not None)
    assert sum(counts.values()) == matched
    assert sum(counts.values()) <= script.non_empty_count()


def test_counting_is_idempotent():
    chars = _chars("SUNITA", "AMIT")
    assert count_dialogues(SCRIPT, chars) == count_dialogues(SCRIPT, chars)


def test_singleton_count_ignores_other_characters():
    script = parse_script("KAMLA DEVI: a\nKAMLA: b")
    # alone, KAMLA also claims the KAMLA DEVI line
    assert count_dialogues(script, _chars("KAMLA")) == {"KAMLA": 2}


def test_recount_merges_subset_counts():
    chars = CharacterSet([Character("SUNITA", 0.9, 7), Character("AMIT", 0.9)])
    merged = recount(SCRIPT, chars, ["AMIT"])
    assert [(c.name, c.dialogue_count) for c in merged] == [("SUNITA", 7), ("AMIT", 1)]
