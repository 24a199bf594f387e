from review_panel.core.services import JsonExtractor


def test_bare_object_is_returned_trimmed():
    assert JsonExtractor().extract('  {"a": 1}\n') == '{"a": 1}'


def test_fenced_json_block():
    text = 'Here is the review:\n```json\n{"a": 1}\n```\nThanks!'
    assert JsonExtractor().extract(text) == '{"a": 1}'


def test_untagged_fenced_block():
    text = 'Result:\n```\n{"a": {"b": 2}}\n```'
    assert JsonExtractor().extract(text) == '{"a": {"b": 2}}'


def test_fenced_block_that_is_not_json_falls_through_to_braces():
    text = 'Intro {"a": 1} ```python\nprint(1)\n``` outro'
    assert JsonExtractor().extract(text) == '{"a": 1}'


def test_greedy_first_to_last_brace():
    text = 'Sure! {"a": 1} and also {"b": 2} done'
    assert JsonExtractor().extract(text) == '{"a": 1} and also {"b": 2}'


def test_no_braces_returns_input_unchanged():
    text = "  I cannot review this.  "
    assert JsonExtractor().extract(text) == text
