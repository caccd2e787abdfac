"""Chant Pointer — psalm pointing for Anglican-style chant tones.

WHY: A psalm verse sung to a chant tone needs two marks a singer can read
at a glance: where the mid-line pause (caesura) falls and which syllable
carries the tone's melodic accent. Marking these by hand across 150 psalms
is slow and inconsistent; a deterministic heuristic does it in one pass.

HOW: Three-stage pipeline — tokenize and count syllables (core), place the
caesura and accent markers line by line (core), then wrap the result into
persisted psalm records and output files (psalms, formatters, CLI). Each
stage is independently testable.

RULES:
- The core is pure: no I/O, no shared mutable state
- All configuration sets live in one immutable PointingRules value
- Adding a new output format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
