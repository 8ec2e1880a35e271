"""RecordingStore: a store double that records calls and returns canned results.

Used where a test must prove the handler never reached the store,
or needs a result the real store cannot produce on demand.
"""


class RecordingStore:
    """Any awaited store method is recorded; results come from `responses`."""

    def __init__(self, **responses):
        self.calls: list[tuple[str, tuple]] = []
        self.responses = responses

    def __getattr__(self, name):
        async def _method(*args, **kwargs):
            self.calls.append((name, args))
            result = self.responses.get(name)
            return result(*args) if callable(result) else result
        return _method
