"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from db import init_db, make_engine, make_session_factory  # noqa: E402
from lexical.client import DefinitionSource  # noqa: E402
from lexical.errors import NetworkError  # noqa: E402

CAT_PAGE = """
<html><body>
<div class="word_tab_title word_tab_title_0">
  <h2 class="fl"><span class="color-black">/kæt/</span><span>extra</span></h2>
  <h2>ignored</h2>
</div>
<ul id="slide_show">
  <li class="slide_content" rel="0">
    <div class="content">
      <div class="bg-grey bold font-large m-top20"><span>Danh từ</span></div>
      <div class="green bold margin25 m-top15">  con mèo  </div>
      <div class="color-light-blue margin25">a cat and dog life</div>
      <div class="grey bold margin25">thành ngữ</div>
      <div class="green bold margin25 m-top15">người đàn bà nanh ác</div>
      <div class="bg-grey bold font-large m-top20"><span>Ngoại động từ</span></div>
      <div class="green bold margin25 m-top15">kéo (neo) lên đòn kéo neo</div>
    </div>
  </li>
  <li class="slide_content" rel="1">
    <div class="content">
      <div class="bg-grey bold font-large m-top20"><span>Noun</span></div>
      <div class="green bold margin25 m-top15">a small domesticated carnivorous mammal</div>
    </div>
  </li>
</ul>
</body></html>
"""

DOG_PAGE = """
<html><body>
<div class="word_tab_title_0"><h2><span>/dɒɡ/</span></h2></div>
<ul>
  <li class="slide_content" rel="0">
    <div class="content">
      <div class="bg-grey bold"><span>Danh từ</span></div>
      <div class="green bold">chó</div>
    </div>
  </li>
</ul>
</body></html>
"""

EMPTY_PAGE = "<html><body><p>Không tìm thấy</p></body></html>"


class FakeSource(DefinitionSource):
    """DefinitionSource без сети: страницы и ссылки из словарей, ошибки по списку"""

    def __init__(
        self,
        pages: Optional[Dict[str, str]] = None,
        sounds: Optional[Dict[Tuple[str, str], str]] = None,
        failing_pages: Iterable[str] = (),
        failing_sounds: Iterable[Tuple[str, str]] = (),
        broken_pages: Iterable[str] = (),
    ):
        self.pages = pages or {}
        self.sounds = sounds or {}
        self.failing_pages = set(failing_pages)
        self.failing_sounds = set(failing_sounds)
        self.broken_pages = set(broken_pages)
        self.page_calls = []
        self.sound_calls = []

    async def fetch_definition_page(self, word: str) -> str:
        self.page_calls.append(word)
        if word in self.failing_pages:
            raise NetworkError(f"https://dict.test/find?query={word}", status=503)
        if word in self.broken_pages:
            raise RuntimeError("unexpected failure")
        return self.pages.get(word, EMPTY_PAGE)

    async def fetch_sound_url(self, accent: str, word: str) -> Optional[str]:
        self.sound_calls.append((accent, word))
        if (accent, word) in self.failing_sounds:
            raise NetworkError(f"https://dict.test/ajax/getsound?accent={accent}&word={word}", status=500)
        return self.sounds.get((accent, word))


@pytest.fixture
def cat_page():
    return CAT_PAGE


@pytest.fixture
def dog_page():
    return DOG_PAGE


@pytest.fixture
def empty_page():
    return EMPTY_PAGE


@pytest.fixture
def fake_source():
    """Factory for FakeSource instances."""
    return FakeSource


@pytest.fixture
def sample_sounds():
    return {
        ("uk", "cat"): "https://stream.test/uk/cat.mp3",
        ("us", "cat"): "https://stream.test/us/cat.mp3",
        ("uk", "dog"): "https://stream.test/uk/dog.mp3",
        ("us", "dog"): "https://stream.test/us/dog.mp3",
    }


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
async def engine(database_url):
    engine = make_engine(database_url)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    async with make_session_factory(engine)() as session:
        yield session
