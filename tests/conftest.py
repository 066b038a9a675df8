import importlib
import io

import pytest

@pytest.fixture(scope="session")
def convert():
    return importlib.import_module("hexyg.convert")


class ChunkedReader(io.BytesIO):
    """BytesIO that records read sizes and can cap each read, like a pipe."""

    def __init__(self, data: bytes, cap: int = 0):
        super().__init__(data)
        self.cap = cap
        self.sizes: list[int] = []

    def read(self, size=-1):
        self.sizes.append(size)
        if self.cap and (size < 0 or size > self.cap):
            size = self.cap
        return super().read(size)

@pytest.fixture
def chunked_reader():
    return ChunkedReader
