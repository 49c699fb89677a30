"""Tests for the lookup pipeline."""

import asyncio

import pytest

from lexical.errors import BatchFailure
from lexical.extractor import (
    EMPTY_INPUT_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    WordExtractor,
    extract_and_translate,
    run_extraction,
)


class TestLookup:
    """Tests for WordExtractor.lookup()."""

    async def test_full_record(self, fake_source, cat_page, sample_sounds):
        source = fake_source(pages={"cat": cat_page}, sounds=sample_sounds)

        word = await WordExtractor(source).lookup("cat")

        assert word.word == "cat"
        assert word.phonetic_uk == "/kæt/"
        assert word.phonetic_us == "/kæt/"
        assert [m.part_of_speech for m in word.meanings] == ["Danh từ", "Ngoại động từ"]
        assert word.uk_sound_url == "https://stream.test/uk/cat.mp3"
        assert word.us_sound_url == "https://stream.test/us/cat.mp3"

    async def test_one_accent_fails(self, fake_source, cat_page, sample_sounds):
        source = fake_source(pages={"cat": cat_page}, sounds=sample_sounds, failing_sounds=[("uk", "cat")])

        word = await WordExtractor(source).lookup("cat")

        assert word.uk_sound_url is None
        assert word.us_sound_url == "https://stream.test/us/cat.mp3"
        assert word.phonetic_uk == "/kæt/"
        assert len(word.meanings) == 2

    async def test_both_accents_fail(self, fake_source, cat_page):
        source = fake_source(pages={"cat": cat_page}, failing_sounds=[("uk", "cat"), ("us", "cat")])

        word = await WordExtractor(source).lookup("cat")

        assert word.uk_sound_url is None
        assert word.us_sound_url is None
        assert len(word.meanings) == 2

    async def test_unexpected_sound_error_waits_for_other_accent(self, fake_source, cat_page):
        finished = []

        class SlowSource(fake_source):
            async def fetch_sound_url(self, accent, word):
                if accent == "uk":
                    raise RuntimeError("unexpected failure")
                await asyncio.sleep(0.01)
                finished.append(accent)
                return None

        with pytest.raises(RuntimeError):
            await WordExtractor(SlowSource(pages={"cat": cat_page})).lookup("cat")

        assert finished == ["us"]

    async def test_unparseable_page_degrades(self, fake_source):
        source = fake_source(pages={"zzz": "<<<not html"})

        word = await WordExtractor(source).lookup("zzz")

        assert word.word == "zzz"
        assert word.meanings == []
        assert word.phonetic_uk == ""


class TestExtractAndTranslate:
    """Tests for extract_and_translate()."""

    async def test_words_in_token_order(self, fake_source, cat_page, dog_page, sample_sounds):
        source = fake_source(pages={"cat": cat_page, "dog": dog_page}, sounds=sample_sounds)

        words = await extract_and_translate("Dog, cat and DOG.", source)

        assert [w.word for w in words] == ["dog", "cat", "and"]
        assert words[0].phonetic_uk == "/dɒɡ/"
        # слово без страницы всё равно остаётся в результате
        assert words[2].meanings == []
        assert source.page_calls == ["dog", "cat", "and"]

    async def test_failed_page_drops_only_that_word(self, fake_source, cat_page, dog_page, sample_sounds):
        source = fake_source(
            pages={"cat": cat_page, "dog": dog_page},
            sounds=sample_sounds,
            failing_pages=["bird"],
        )

        words = await extract_and_translate("cat bird dog", source)

        assert [w.word for w in words] == ["cat", "dog"]
        # озвучку для упавшего слова не запрашиваем
        assert all(word != "bird" for _, word in source.sound_calls)

    async def test_every_page_fails(self, fake_source):
        source = fake_source(failing_pages=["cat", "dog"])
        assert await extract_and_translate("cat dog", source) == []

    async def test_no_tokens(self, fake_source):
        source = fake_source()
        assert await extract_and_translate("?!...", source) == []
        assert source.page_calls == []

    async def test_unexpected_error_is_batch_failure(self, fake_source):
        source = fake_source(broken_pages=["dog"])
        with pytest.raises(BatchFailure):
            await extract_and_translate("cat dog", source)


class TestRunExtraction:
    """Tests for run_extraction()."""

    async def test_blank_input(self, fake_source):
        result = await run_extraction("   ", fake_source())
        assert result.error == EMPTY_INPUT_MESSAGE
        assert result.words is None
        assert result.input_text == "   "

    async def test_none_input(self, fake_source):
        result = await run_extraction(None, fake_source())
        assert result.error == EMPTY_INPUT_MESSAGE
        assert result.input_text == ""

    async def test_no_words_found(self, fake_source):
        result = await run_extraction("... !!!", fake_source())
        assert result.error is None
        assert result.words == []
        assert result.no_words_found

    async def test_success(self, fake_source, cat_page, sample_sounds):
        result = await run_extraction("Cat!", fake_source(pages={"cat": cat_page}, sounds=sample_sounds))
        assert result.error is None
        assert not result.no_words_found
        assert [w.word for w in result.words] == ["cat"]
        assert result.input_text == "Cat!"

    async def test_unexpected_failure(self, fake_source):
        result = await run_extraction("cat", fake_source(broken_pages=["cat"]))
        assert result.error == GENERIC_ERROR_MESSAGE
        assert result.words is None
        assert result.input_text == "cat"
