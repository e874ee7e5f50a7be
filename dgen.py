r'''
.------..------..------..------.
|d.--. ||g.--. ||e.--. ||n.--. |
| :/\: || :/\: || (\/) || :(): |
| (__) || :\/: || :\/: || ()() |
| '--'d|| '--'g|| '--'e|| '--'n|
`------'`------'`------'`------'
schema-driven fake records for tests.

a schema is a dict of field -> spec, where a spec is one of:
  'word'                               faker provider name
  ('pyint', {'min_value': 1})          faker provider with kwargs
  {'_qen_provider': 'choice', 'from': [...]}
  {'_qen_provider': 'ref', 'key': 'id', 'format': 'user-{}'}
  {'_qen_provider': 'literal', 'value': ...}
  [{'_qen_items': <schema>, '_qen_count': 3 | (low, high)}]
nested dicts are generated recursively.
'''

import numpy as np
from faker import Faker
from lazinq import from_producer, Enumerable
from typing import Any, Dict, Optional


class Generator:
    """schema interpreter backed by a seeded faker and numpy generator."""

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)

    def _provider(self, config: Dict, context: Dict) -> Any:
        kind = config["_qen_provider"]
        if kind == "choice":
            picked = self._rng.choice(config["from"])
            # numpy scalars back to plain python values
            return picked.item() if hasattr(picked, 'item') else picked
        if kind == "literal":
            return config["value"]
        if kind == "ref":
            if config["key"] not in context:
                raise ValueError(f"reference to '{config['key']}' not found in current context.")
            value = context[config["key"]]
            return config["format"].format(value) if "format" in config else value
        raise ValueError(f"unknown _qen_provider: '{kind}'")

    def _faker(self, name: str, kwargs: Optional[Dict] = None) -> Any:
        method = getattr(self._fake, name, None)
        if method is None:
            raise ValueError(f"faker has no provider '{name}'")
        return method(**(kwargs or {}))

    def _count(self, spec: Dict) -> int:
        count = spec.get("_qen_count", 5)
        if isinstance(count, (list, tuple)):
            low, high = count
            return int(self._rng.integers(low, high, endpoint=True))
        return count

    def create(self, schema: Any, context: Optional[Dict] = None) -> Any:
        context = context or {}
        if isinstance(schema, dict):
            if "_qen_provider" in schema:
                return self._provider(schema, context)
            record = {}
            for key, spec in schema.items():
                # later fields may reference earlier ones
                record[key] = self.create(spec, {**context, **record})
            return record
        if isinstance(schema, list):
            if not schema:
                return []
            spec = schema[0]
            item_schema = spec.get("_qen_items", spec) if isinstance(spec, dict) else spec
            count = self._count(spec) if isinstance(spec, dict) else 5
            return [self.create(item_schema, context) for _ in range(count)]
        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._faker(schema[0], schema[1])
        if isinstance(schema, str) and hasattr(self._fake, schema):
            return self._faker(schema)
        return schema


class _SchemaProvider:
    def __init__(self, schema: Any, seed: Optional[int] = None):
        self._schema = schema
        self._seed = seed

    def take(self, count: int) -> Enumerable:
        """`count` records, generated once so every drain sees the same data"""
        generator = Generator(self._seed)
        records = [generator.create(self._schema) for _ in range(count)]
        return from_producer(lambda: records)


def from_schema(schema: Any, seed: Optional[int] = None) -> _SchemaProvider:
    return _SchemaProvider(schema, seed)
