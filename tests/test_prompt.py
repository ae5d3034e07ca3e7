"""Tests for the dynamic prompt builder."""

from correction_engine.profile import Domain, NgramEntry, ProfileStore, UserProfile
from correction_engine.prompt import (
    FALLBACK_EXEMPLAR,
    LANGUAGE_EXEMPLARS,
    DynamicPromptBuilder,
    truncate_prompt,
)


def make_builder(max_length=500, **profile_fields) -> DynamicPromptBuilder:
    store = ProfileStore(profile=UserProfile(**profile_fields))
    return DynamicPromptBuilder(store, max_length=max_length)


class TestBuild:
    """Tests for DynamicPromptBuilder.build."""

    def test_empty_profile_is_base_exemplar(self):
        """Test that a fresh profile yields just the language exemplar."""
        assert make_builder().build("tr") == LANGUAGE_EXEMPLARS["tr"]

    def test_region_suffix_ignored(self):
        """Test that "en-US" uses the English exemplar."""
        assert make_builder().build("en-US") == LANGUAGE_EXEMPLARS["en"]

    def test_unknown_language_fallback(self):
        """Test the fallback exemplar for unsupported languages."""
        assert make_builder().build("xx") == FALLBACK_EXEMPLAR

    def test_domain_phrases_added(self):
        """Test that the detected domain contributes its phrases."""
        prompt = make_builder(domain=Domain.MEDICAL).build("tr")
        assert prompt.startswith(LANGUAGE_EXEMPLARS["tr"])
        assert "Hasta muayene edildi." in prompt

    def test_domain_without_phrases_for_language(self):
        """Test that a domain with no phrases in a language adds nothing."""
        assert make_builder(domain=Domain.MEDICAL).build("en") == LANGUAGE_EXEMPLARS["en"]

    def test_user_terms_appended(self):
        """Test that frequent words and bigrams follow the exemplar."""
        prompt = make_builder(
            frequent_words=["kubernetes", "sprint"],
            ngrams=[
                NgramEntry(ngram="code review", count=3),
                NgramEntry(ngram="daily stand up", count=2),
            ],
        ).build("tr")

        assert prompt == LANGUAGE_EXEMPLARS["tr"] + " kubernetes, sprint, code review"

    def test_never_exceeds_max_length(self):
        """Test the length bound with a large profile."""
        words = [f"kelime{i:02d}" for i in range(50)]
        bigrams = [NgramEntry(ngram=f"ikili {i}", count=1) for i in range(20)]
        prompt = make_builder(
            domain=Domain.TECHNICAL, frequent_words=words, ngrams=bigrams
        ).build("tr")

        assert len(prompt) <= 500
        assert "kelime00" in prompt

    def test_short_limit_cuts_at_sentence(self):
        """Test truncation at the last sentence boundary."""
        prompt = make_builder(max_length=60).build("tr")
        assert prompt == "Merhaba, bugün hava çok güzel."

    def test_follows_profile_updates(self):
        """Test that the builder reads the store's current profile."""
        store = ProfileStore()
        builder = DynamicPromptBuilder(store)
        store.record_transcription("server tarafında api deploy ettik")

        assert "Deploy etmemiz lazım." in builder.build("tr")


class TestTruncatePrompt:
    """Tests for truncate_prompt."""

    def test_short_prompt_unchanged(self):
        """Test that prompts within the limit are untouched."""
        assert truncate_prompt("Merhaba.", 10) == "Merhaba."

    def test_cuts_after_period(self):
        """Test that the cut keeps the final period."""
        assert truncate_prompt("Bir. İki. Üç.", 10) == "Bir. İki."

    def test_hard_cut_without_boundary(self):
        """Test a plain cut when there is no sentence boundary."""
        assert truncate_prompt("abcdef", 3) == "abc"


class TestPreview:
    """Tests for the layered preview."""

    def test_layers(self):
        """Test that the preview separates the three layers."""
        preview = make_builder(domain=Domain.LEGAL, frequent_words=["dilekçe"]).preview("tr")

        assert preview.base_prompt == LANGUAGE_EXEMPLARS["tr"]
        assert preview.domain_addition.startswith(" Mahkeme")
        assert preview.user_terms == "dilekçe"
        assert preview.max_length == 500
        assert preview.total_length == (
            len(preview.base_prompt) + len(preview.domain_addition) + len(" dilekçe")
        )

    def test_empty_layers(self):
        """Test the preview of a fresh profile."""
        preview = make_builder().preview("en")
        assert preview.domain_addition == ""
        assert preview.user_terms == ""
        assert preview.total_length == len(LANGUAGE_EXEMPLARS["en"])
