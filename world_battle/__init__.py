"""World Battle - a rules engine for a Risk-style territory conquest game."""
