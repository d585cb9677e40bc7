import json

import pytest


@pytest.fixture
def scenario_lines():
    """Two records in project a/s1 out of order, one record with no project."""
    return [
        '{"project":"a","sessionId":"s1","timestamp":2,"x":1}',
        '{"project":"a","sessionId":"s1","timestamp":1,"x":2}',
        '{"sessionId":"s2","timestamp":5,"x":3}',
    ]


@pytest.fixture
def write_history(tmp_path):
    """Write lines (str or dict) to a history.jsonl under tmp_path, return its path."""
    def _write(lines, name="history.jsonl"):
        path = tmp_path / name
        text = "\n".join(
            line if isinstance(line, str) else json.dumps(line) for line in lines
        )
        path.write_text(text + ("\n" if lines else ""), encoding="utf-8")
        return str(path)
    return _write
