import pytest

from stylist.discovery import DiscoverySource, RuleBasedDiscovery
from stylist.discovery.rule_based import cue_name
from stylist.script_parser import parse_script

SCREENPLAY = """\
FADE IN:

INT. KITCHEN - DAY

JOHN
Where were you?

MARY (V.O.)
Out.

JOHN (CONT'D)
Out where?

(beat)
CUT TO:
"""


def test_discovers_cues_in_order_with_fixed_confidence():
    chars = RuleBasedDiscovery().discover(parse_script(SCREENPLAY))
    assert chars.names == ["JOHN", "MARY"]
    assert {c.confidence for c in chars} == {0.8}
    assert RuleBasedDiscovery.source is DiscoverySource.RULES


@pytest.mark.parametrize(
    "line",
    [
        "INT. KITCHEN - DAY",
        "EXT. STREET - NIGHT",
        "INT./EXT. CAR - DAY",
        "FADE IN:",
        "FADE OUT:",
        "CUT TO:",
        "CONTINUED",
        "BACK TO: THE PARTY",
        "DISSOLVE TO:",
        "(beat)",
        "(WHISPERING)",
        "Where were you?",
        "",
        "   ",
        "A" * 50,
    ],
)
def test_non_cue_lines_are_skipped(line):
    assert cue_name(line) is None


def test_length_limit_is_exclusive():
    assert cue_name("A" * 49) == "A" * 49
    assert cue_name("A" * 10, max_length=10) is None


def test_trailing_parentheticals_are_stripped():
    assert cue_name("  MARY (V.O.) (CONT'D)  ") == "MARY"


def test_lines_without_letters_are_accepted():
    assert cue_name("...") == "..."


def test_dedup_is_by_exact_string():
    script = parse_script("JOHN\nJOHN (O.S.)\nJÖHN\n")
    assert RuleBasedDiscovery().discover(script).names == ["JOHN", "JÖHN"]


def test_custom_confidence():
    chars = RuleBasedDiscovery(confidence=0.5).discover(parse_script("RAVI"))
    assert chars.get("RAVI").confidence == 0.5


def test_prose_yields_nothing():
    assert len(RuleBasedDiscovery().discover(parse_script("It was dark.\nShe left."))) == 0
