"""Tests for text tokenization."""

from lexical.tokenizer import tokenize


class TestTokenize:
    """Tests for tokenize()."""

    def test_case_fold_dedupe_and_hyphen(self):
        assert tokenize("Cat cat, dog-house!") == ["cat", "dog house"]

    def test_only_first_hyphen_replaced(self):
        assert tokenize("state-of-the-art") == ["state of-the-art"]

    def test_all_punctuation(self):
        assert tokenize("!!! ... ,,, ??? ()") == []

    def test_empty_and_whitespace(self):
        assert tokenize("") == []
        assert tokenize("   \n\t  ") == []

    def test_preserves_first_seen_order(self):
        assert tokenize("The dog saw the DOG and a cat.") == ["the", "dog", "saw", "and", "a", "cat"]

    def test_digits_and_underscores_kept(self):
        assert tokenize("version_2 has 3 bugs") == ["version_2", "has", "3", "bugs"]

    def test_unicode_letters(self):
        assert tokenize("Café naïve — Über") == ["café", "naïve", "über"]

    def test_lone_hyphen_dropped(self):
        # "-" -> " " -> "" after trim
        assert tokenize("well - done") == ["well", "done"]

    def test_apostrophe_splits(self):
        assert tokenize("don't") == ["don", "t"]

    def test_unique_and_lowercase(self):
        words = tokenize("A a B b-B c_C C_c Ä ä")
        assert len(words) == len(set(words))
        assert all(word == word.lower() for word in words)

    def test_idempotent(self):
        text = "Hello, World! hello-world; HELLO"
        assert tokenize(text) == tokenize(text)
