import pytest

from chaos_api.domain.identifier import NOTE_ID_LENGTH, is_valid_note_id, new_note_id
from chaos_api.domain.links import (
    find_internal_links,
    internal_link_target,
    note_path,
    notes_root_path,
    resolve_internal_links,
)

NOTE_ID = "abc123def456ghi789jkl"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (NOTE_ID, True),
        ("0" * NOTE_ID_LENGTH, True),
        (NOTE_ID[:-1], False),
        (NOTE_ID + "m", False),
        ("ABC123DEF456GHI789JKL", False),
        ("abc123def456ghi789jk-", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_note_id(value, expected) -> None:
    assert is_valid_note_id(value) is expected


def test_new_note_id_is_valid_and_fresh() -> None:
    ids = {new_note_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(is_valid_note_id(i) for i in ids)


def test_piped_reference_becomes_link() -> None:
    assert resolve_internal_links(f"[[{NOTE_ID}|See also]]") == f"[See also](/chaos/note/{NOTE_ID})"


def test_bare_reference_is_unchanged() -> None:
    text = f"[[{NOTE_ID}]]"
    assert resolve_internal_links(text) == text


@pytest.mark.parametrize(
    "text",
    [
        "[[short]]",
        "[[short|Label]]",
        f"[[{NOTE_ID.upper()}|Label]]",
        f"[[{NOTE_ID}x|Label]]",
        f"[[{NOTE_ID}|]]",
        "[regular](link) and [[Some Page]] and [x]",
    ],
)
def test_invalid_references_are_untouched(text: str) -> None:
    assert resolve_internal_links(text) == text


def test_mixed_text_is_resolved_left_to_right() -> None:
    other = "zzz999yyy888xxx777www"
    text = f"A [[{NOTE_ID}|one]] B [[{other}]] C [[bad|x]] D [[{other}|two]]"
    assert resolve_internal_links(text, base_path="/notes") == (
        f"A [one](/notes/note/{NOTE_ID}) B [[{other}]] C [[bad|x]] D [two](/notes/note/{other})"
    )


def test_find_internal_links() -> None:
    text = f"x [[{NOTE_ID}]] y [[{NOTE_ID}|label]] [[nope]]"
    links = find_internal_links(text)
    assert [(link.note_id, link.display) for link in links] == [(NOTE_ID, None), (NOTE_ID, "label")]
    assert text[links[0].start_offset : links[0].end_offset] == f"[[{NOTE_ID}]]"


def test_internal_link_target() -> None:
    assert internal_link_target(note_path(NOTE_ID)) == NOTE_ID
    assert internal_link_target("/chaos/note/short") is None
    assert internal_link_target("https://example.com") is None
    assert internal_link_target(None) is None
    assert notes_root_path() == "/chaos/"
