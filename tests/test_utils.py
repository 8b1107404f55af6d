from recipe_importer.utils import normalize_text


def test_decodes_named_and_numeric_entities():
    assert normalize_text("Mac &amp; Cheese") == "Mac & Cheese"
    assert normalize_text("Cr&#232;me br&ucirc;l&eacute;e") == "Crème brûlée"


def test_strips_tags_and_collapses_whitespace():
    assert normalize_text("  <b>Bold</b>   flavour\n\t and <i>more</i>  ") == "Bold flavour and more"


def test_percent_decodes_when_text_contains_percent():
    assert normalize_text("caf%C3%A9 au lait") == "café au lait"


def test_keeps_text_when_percent_decoding_fails():
    assert normalize_text("%E9t%E9 salad") == "%E9t%E9 salad"
    assert normalize_text("50% less sugar") == "50% less sugar"


def test_one_malformed_escape_leaves_every_escape_encoded():
    assert normalize_text("100%25 and %zz") == "100%25 and %zz"
    assert normalize_text("caf%C3%A9 at 20%") == "caf%C3%A9 at 20%"


def test_empty_input_yields_empty_string():
    assert normalize_text(None) == ""
    assert normalize_text("") == ""
    assert normalize_text("   \n ") == ""
