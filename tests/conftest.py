"""Pytest configuration and shared fixtures."""

from typing import Callable

import pytest

from docs_inline.config import InlineConfig

from helpers import DOTNET_SAMPLE, HELLO_SAMPLE, RAW, SampleServer


@pytest.fixture
def sample_server() -> SampleServer:
    """Sample repository serving the dotnet and hello-world samples."""
    return SampleServer({
        f"{RAW}/lib/sdm/dotnetCore.ts": DOTNET_SAMPLE,
        f"{RAW}/lib/command/helloWorld.ts": HELLO_SAMPLE,
    })


@pytest.fixture
def config() -> InlineConfig:
    """Default configuration."""
    return InlineConfig()


@pytest.fixture
def log_lines() -> list[str]:
    """Collects summary sections written by the reconciler."""
    return []


@pytest.fixture
def write_to_log(log_lines) -> Callable[[str], None]:
    return log_lines.append


@pytest.fixture
def generator_markdown():
    """Markdown document with one stale reference block."""
    return '''# Generators

<!-- atomist:code-snippet:start=lib/sdm/dotnetCore.ts#dotnetGenerator -->
```typescript
export const SomethingOld = {};
```
<!-- atomist:code-snippet:end -->

Some more text to make it more interesting
'''
