from infrastructure.scraping import extract_assigned_object, find_balanced_object


def test_nested_object_is_not_truncated_at_first_inner_brace():
    script = 'window.X = {"a":{"b":1},"c":2}; window.other = function() { return {}; };'
    assert find_balanced_object(script, script.index("=")) == '{"a":{"b":1},"c":2}'
    assert extract_assigned_object(script, marker="window.X =") == {"a": {"b": 1}, "c": 2}


def test_braces_inside_strings_are_ignored():
    script = 'window.__SSR_DATA__ = {"label":"}{ not a brace","n":{"q":"\\"}"}};trailing()'
    assert extract_assigned_object(script) == {"label": "}{ not a brace", "n": {"q": '"}'}}


def test_missing_marker_or_unbalanced_object():
    assert extract_assigned_object("<html>no data</html>") is None
    assert extract_assigned_object('window.__SSR_DATA__ = {"a":{"b":1}') is None
    assert extract_assigned_object("") is None


def test_invalid_json_is_none():
    assert extract_assigned_object("window.__SSR_DATA__ = {a: 1};") is None


def test_non_object_payload_is_none():
    assert find_balanced_object("no braces here") is None
