"""Serialize scan results to JSON and back."""

from monikers import scan
from monikers.serialization import from_json, to_json

doc = scan(':::moniker range="v1"\nHello\n:::moniker-end')

json_str = to_json(doc, indent=2)
print(json_str)

restored = from_json(json_str)
assert restored == doc
