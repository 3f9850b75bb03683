import pytest

from job_tracker.text_utils import contains_normalized, edit_distance, is_close_match, normalize


def test_normalize_turkish():
    assert normalize("  Bugün  ") == "bugun"
    assert normalize("İSTANBUL") == "istanbul"
    assert normalize("IŞIK") == "isik"
    assert normalize("ÇĞÖŞÜ çğöşü") == "cgosu cgosu"
    assert normalize("haftalık\t\n plan") == "haftalık plan"
    assert normalize("") == ""
    assert normalize(None) == ""


@pytest.mark.parametrize("text", ["Mülakat  Google", "  İzmir\tOffer ", "ĞÜŞ", "already clean"])
def test_normalize_is_idempotent(text):
    assert normalize(normalize(text)) == normalize(text)


def test_edit_distance():
    assert edit_distance("today", "today") == 0
    assert edit_distance("today", "todey") == 1
    assert edit_distance("kitten", "sitting") == 3
    assert edit_distance("", "abc") == 3
    assert edit_distance("abc", "") == 3
    assert edit_distance("flaw", "lawn") == edit_distance("lawn", "flaw")


def test_is_close_match():
    assert is_close_match("today", "todey")
    assert is_close_match("TODAY", "today")
    assert is_close_match("bugün", "bugun")
    assert not is_close_match("today", "tomorrow")


def test_contains_normalized():
    assert contains_normalized("Acme Çorp", "acme corp")
    assert contains_normalized("Globex International", "globex")
    assert not contains_normalized("Globex", "Initech")
    assert not contains_normalized("Globex", "")
