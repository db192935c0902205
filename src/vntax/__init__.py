"""Vietnamese personal income tax calculator comparing the pre- and post-2026 rules."""
