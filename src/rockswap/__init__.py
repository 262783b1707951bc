"""RockSwap match-three resolution engine."""
