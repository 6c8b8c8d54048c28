from app.tools.json_extract import NotFound, Parsed, extract_from_messages, extract_results


def test_fenced_json_array_is_unwrapped():
    content = 'Here you go:\n```json\n[{"name": "A", "url": "https://a.io"}]\n```\nDone.'
    outcome = extract_results(content)
    assert outcome == Parsed(items=[{"name": "A", "url": "https://a.io"}], shape="array")


def test_untagged_fence_and_bare_array_in_prose():
    assert isinstance(extract_results('```\n[{"name": "A"}]\n```'), Parsed)
    outcome = extract_results('I found these results [{"name": "B"}] for you')
    assert isinstance(outcome, Parsed)
    assert outcome.items == [{"name": "B"}]


def test_results_key_and_first_list_field():
    assert extract_results({"results": [1, 2]}) == Parsed(items=[1, 2], shape="results")
    outcome = extract_results('{"query": "x", "products": [{"name": "C"}]}')
    assert outcome == Parsed(items=[{"name": "C"}], shape="field:products")


def test_unusable_content_reports_reason():
    assert isinstance(extract_results("no json here"), NotFound)
    assert isinstance(extract_results({"query": "x"}), NotFound)
    assert isinstance(extract_results(42), NotFound)


def test_messages_skip_non_result_types():
    messages = [
        {"type": "THOUGHT", "content": "[1]"},
        {"type": "assistant", "content": "still browsing"},
        {"type": "DONE", "content": {"results": [{"name": "D"}]}},
        {"type": "result", "content": "[{\"name\": \"E\"}]"},
    ]
    outcome = extract_from_messages(messages)
    assert outcome == Parsed(items=[{"name": "D"}], shape="results")


def test_messages_without_result_types():
    outcome = extract_from_messages([{"type": "THOUGHT", "content": "[]"}])
    assert outcome == NotFound("no result messages in transcript")

    failed = extract_from_messages([{"type": "DONE", "content": "nothing"}])
    assert isinstance(failed, NotFound)
    assert failed.reason.startswith("DONE: invalid JSON")
