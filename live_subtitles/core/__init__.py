"""Core segmentation, alignment, and tracking modules.

WHY: The core package holds the only stateful, policy-bearing part of
the system — the alignment engine — together with the pure functions
that build its corpus. Adapters (sources, sinks, server) plug into the
core through small interfaces.

HOW: segmenter.py splits text into sentence-like segments, alignment.py
pairs source and translated segments positionally, engine.py tracks the
speaker's position, session.py owns the engine lifecycle and status
reporting, events.py defines transcript events and the delivery feed.

RULES:
- Matching semantics live in engine.py only
- Error kinds live in errors.py only
- The core knows sinks only through the SubtitleSink interface
- The core never imports from sources or server
"""
