"""Shared fixtures: a small on-disk documentation corpus."""

from __future__ import annotations

from pathlib import Path

import pytest

from docscout.config import AppConfig
from docscout.index.search import DocsService

ROUTING = """---
title: Routing
description: File-based navigation for apps
---
Expo Router uses file-based routing. Every file in the app directory becomes a route.

```js
import { Link } from 'expo-router';
```
"""

CAMERA = """---
title: Camera
description: Take pictures and record video
---
The camera module renders a preview. Use it to take pictures.

```js
import { CameraView } from 'expo-camera';
```
"""

INTRO = """---
title: Introduction
---
Create a project and start developing. Routing is covered later.
"""


def write_doc(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def corpus(tmp_path: Path) -> Path:
    root = tmp_path / "docs"
    write_doc(root, "guides/routing.mdx", ROUTING)
    write_doc(root, "reference/v51.0.0/sdk/camera.md", CAMERA)
    write_doc(root, "get-started/introduction.md", INTRO)
    return root


@pytest.fixture
def service(corpus: Path) -> DocsService:
    return DocsService(AppConfig(corpus_root=corpus))
