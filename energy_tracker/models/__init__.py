# Models package
from energy_tracker.models.kv import KVRecord
from energy_tracker.models.usage import UsageEntry, UsageEntryCreate

__all__ = ["KVRecord", "UsageEntry", "UsageEntryCreate"]
