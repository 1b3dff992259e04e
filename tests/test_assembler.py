"""Tests for snippet cutting and prompt assembly."""

from __future__ import annotations

from parliament_context.application.context import ContextAssembler, make_snippet
from parliament_context.application.context.assembler import SNIPPET_MAX_CHARS
from parliament_context.domain.entities import HydratedSource, Language, SourceType


class TestMakeSnippet:
    def test_short_content_unchanged(self):
        assert make_snippet("Bill C-35 received Royal Assent.") == ("Bill C-35 received Royal Assent.", False)

    def test_whitespace_collapsed(self):
        snippet, _ = make_snippet("Bill   C-35\n\nreceived\tRoyal Assent.")
        assert snippet == "Bill C-35 received Royal Assent."

    def test_hard_cut(self):
        snippet, truncated = make_snippet("x" * 1000)
        assert len(snippet) == SNIPPET_MAX_CHARS
        assert truncated

    def test_cut_at_sentence_end(self):
        first = "a" * 250 + ". "
        snippet, truncated = make_snippet(first + "b" * 400)
        assert snippet == "a" * 250 + "."
        assert truncated

    def test_early_sentence_end_ignored(self):
        content = "Short. " + "c" * 600
        snippet, _ = make_snippet(content)
        assert len(snippet) == SNIPPET_MAX_CHARS


class TestContextAssembler:
    def test_numbering_and_lines(self, bill_results, vote_results):
        result = ContextAssembler().assemble([bill_results[0], vote_results[0]], [], Language.EN)

        assert [c.prefixed_id for c in result.citations] == ["P1", "P2"]
        assert [c.id for c in result.citations] == [1, 2]
        lines = result.prompt.splitlines()
        assert lines[0] == "Relevant context (EN):"
        assert lines[1].startswith("- [P1] (bill) Bill C-35 — 2024-03-28 — Bill C-35 establishes")
        assert lines[2].startswith("- [P2] (vote_question) ")
        assert "Sources:" in lines

    def test_source_lines(self, bill_results):
        result = ContextAssembler().assemble(bill_results[:1], [], Language.EN)
        citation = result.citations[0]
        expected = f"  [P1] {citation.text_en} — {citation.title_en} ({citation.url_en})"
        assert result.prompt.splitlines()[-1] == expected

    def test_french_output(self, bill_results):
        result = ContextAssembler().assemble(bill_results[:1], [], Language.FR)
        citation = result.citations[0]
        assert result.prompt.startswith("Contexte pertinent (FR):")
        assert "(bill) Projet de loi C-35" in result.prompt
        assert citation.url_fr in result.prompt
        assert citation.title_en == "Bill C-35"
        assert result.language is Language.FR

    def test_duplicate_snippets_do_not_consume_ids(self, result_factory):
        same = "Bill C-35 establishes a national framework."
        results = [
            result_factory(SourceType.BILL, "a", content=same),
            result_factory(SourceType.BILL, "b", content=same.upper()),
            result_factory(SourceType.HANSARD, "h", content="A different statement."),
        ]
        assembled = ContextAssembler().assemble(results, [], Language.EN)
        assert [c.prefixed_id for c in assembled.citations] == ["P1", "P2"]
        assert assembled.citations[1].source_type is SourceType.HANSARD

    def test_truncated_snippet_gets_ellipsis(self, result_factory):
        result = result_factory(content="word " * 200)
        assembled = ContextAssembler().assemble([result], [], Language.EN)
        assert "…" in assembled.prompt.splitlines()[1]

    def test_empty_results(self):
        assembled = ContextAssembler().assemble([], [], Language.EN)
        assert assembled.prompt == "Relevant context (EN):\nSources:"
        assert assembled.citations == ()

    def test_hydrated_sources_passed_through(self, bill_results):
        hydrated = [HydratedSource(SourceType.BILL, "bill-C-35-44-1", "# C-35", Language.EN)]
        assembled = ContextAssembler().assemble(bill_results[:1], hydrated, Language.EN)
        assert assembled.hydrated_sources == tuple(hydrated)

    def test_deterministic(self, bill_results, vote_results, hansard_results):
        results = [*bill_results, *vote_results, *hansard_results]
        first = ContextAssembler().assemble(results, [], Language.EN)
        second = ContextAssembler().assemble(results, [], Language.EN)
        assert first.to_json() == second.to_json()
