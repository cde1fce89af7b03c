# tests/test_utils/test_slug.py
import pytest
from kushon.utils.slug import generate_slug

@pytest.mark.parametrize("name, expected", [
    ("One Piece", "one-piece"),
    ("Chainsaw Man: Part 2!", "chainsaw-man-part-2"),
    ("Ao  no   Hako", "ao-no-hako"),
    ("Re:Zero -- Starting Life", "rezero-starting-life"),
    ("Pokémon Adventures", "pokmon-adventures"),
    ("20th Century Boys", "20th-century-boys"),
])
def test_generate_slug(name, expected):
    assert generate_slug(name) == expected
