"""Tests for diff-based learning."""

from correction_engine.corrections import learn_from_diff, learn_pipeline_corrections
from correction_engine.corrections.learning import is_stopword
from correction_engine.locale import ENGLISH, TURKISH, get_locale


class TestLearnFromDiff:
    """Tests for learn_from_diff."""

    def test_accent_fixes_are_learned(self):
        """Test that near-miss spellings become direct corrections."""
        learned = learn_from_diff("bugun guzel bir gun", "bugün güzel bir gün")

        assert learned.direct == [
            ("bugun", "bugün"),
            ("guzel", "güzel"),
            ("gun", "gün"),
        ]
        assert learned.stem == []

    def test_tokens_are_lowercased(self):
        """Test that case differences alone are not corrections."""
        learned = learn_from_diff("Guzel", "güzel")
        assert learned.direct == [("guzel", "güzel")]

        assert learn_from_diff("Merhaba Dunya", "merhaba dunya").direct == []

    def test_stem_inferred_from_shared_suffix(self):
        """Test that a suffixed pair also yields its stem pair."""
        learned = learn_from_diff("ogretmenler geldi", "öğretmenler geldi")

        assert learned.direct == [("ogretmenler", "öğretmenler")]
        assert learned.stem == [("ogretmen", "öğretmen")]

    def test_no_stem_when_suffixes_differ(self):
        """Test that vowel-harmony suffix changes do not produce a stem pair."""
        learned = learn_from_diff("bugun", "bugün")
        assert learned.stem == []

    def test_stopwords_skipped(self):
        """Test that function words are never learned."""
        learned = learn_from_diff("cok guzel", "çok güzel")
        assert learned.direct == [("guzel", "güzel")]

    def test_short_words_skipped(self):
        """Test that words under three characters are ignored."""
        assert learn_from_diff("ab cd", "äb cé").direct == []

    def test_distant_words_skipped(self):
        """Test that rewrites beyond two edits are not corrections."""
        assert learn_from_diff("kitap okudum", "defter yazdım").direct == []

    def test_unequal_lengths_use_alignment(self):
        """Test that an inserted word does not shift the pairing."""
        learned = learn_from_diff("yarin gelecek", "belki yarın gelecek")
        assert learned.direct == [("yarin", "yarın")]

    def test_empty_input(self):
        """Test that empty texts learn nothing."""
        learned = learn_from_diff("", "")
        assert learned.direct == []
        assert learned.stem == []

    def test_locale_stopwords(self):
        """Test that the locale decides what is a stop-word."""
        learned = learn_from_diff("teh report", "the report", ENGLISH)
        assert learned.direct == []

        learned = learn_from_diff("reprot", "report", ENGLISH)
        assert learned.direct == [("reprot", "report")]


class TestLearnPipelineCorrections:
    """Tests for learning from pipeline output."""

    def test_ignores_added_punctuation(self):
        """Test that a trailing period does not hide a fix."""
        pairs = learn_pipeline_corrections("bugun guzel", "Bugün güzel.")
        assert pairs == [("bugun", "bugün"), ("guzel", "güzel")]

    def test_unchanged_text(self):
        """Test that pure punctuation changes learn nothing."""
        assert learn_pipeline_corrections("merhaba dünya", "Merhaba dünya.") == []

    def test_number_conversion_not_learned(self):
        """Test that rewritten numerals are not near misses."""
        assert learn_pipeline_corrections("3 elma aldım", "Üç elma aldım.") == []


class TestIsStopword:
    """Tests for the stop-word helper."""

    def test_default_locale_is_turkish(self):
        """Test that Turkish stop-words apply without a locale."""
        assert is_stopword("Bir")
        assert is_stopword("icin", TURKISH)
        assert not is_stopword("güzel")

    def test_unlisted_language_keeps_default_stopwords(self):
        """Test that a language without its own rules still skips stop-words."""
        learned = learn_from_diff("ve ben bir ile", "vee benn birr ilee", get_locale("de"))

        assert learned.direct == []
        assert is_stopword("ben", get_locale("de"))


class TestDottedCapitalI:
    """Tests for words starting with the Turkish dotted capital I."""

    def test_learned_key_keeps_word_length(self):
        """Test that "İ" folds to a single "i" in learned pairs."""
        learned = learn_from_diff("İnsanlr geldi", "İnsanlar geldi")

        assert learned.direct == [("insanlr", "insanlar")]
        assert len(learned.direct[0][0]) == len("İnsanlr")

    def test_pipeline_pairs(self):
        """Test the self-learning path with a sentence-initial "İ"."""
        assert learn_pipeline_corrections("İstanbl", "İstanbul.") == [("istanbl", "istanbul")]
