"""
MCP Server Instructions - usage guide for AI agents.

Kept apart from server.py so the wording can be maintained on its own.
"""

from __future__ import annotations

SERVER_INSTRUCTIONS = """
Parliament Context MCP Server - grounded context about the Parliament of Canada

═══════════════════════════════════════════════════════════════════════════════
🎯 One tool: retrieve_parliament_context
═══════════════════════════════════════════════════════════════════════════════

Call it with the user's question, in English or French, as written:

```
retrieve_parliament_context(query="What is Bill C-35 about?", limit=10)
retrieve_parliament_context(query="Qu'est-ce que le projet de loi C-35 ?")
```

It returns JSON with:
- language: "en", "fr" or "unknown" (answer in this language)
- prompt: numbered context lines such as "- [P1] (bill) ..." and a Sources block
- citations: P1..Pn, each with title/text/url in both English and French
- hydrated_sources: full markdown of the top document per source type

## Citing
- Cite with the prefixed ids exactly as given: [P1], [P2] ...
- Only cite ids present in `citations`; never invent numbers.
- A hydrated source may carry a `note` when the text exists only in the
  other official language. Mention it when quoting that text.

## Complete lists
Questions such as "who voted yea on Bill C-35" or "list all NDP MPs" return
the COMPLETE set as a single citation with a markdown table in `prompt`.
Present the list as given; do not summarise it as "some members".

## Limits
- `limit` is clamped to [1, 100]; when omitted the server default applies (10 unless configured).
- Fewer citations than `limit` is normal when few documents match the intent.

## Resources
- parliament://intents: which document types are citable for each intent
- parliament://cache/stats: result cache hit/miss counters
"""
