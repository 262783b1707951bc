from dataclasses import dataclass

@dataclass(slots=True)
class TileTypeRegistry:
    """Empty tag component marking the single entity that stores tile kind definitions.

    The same entity also carries a TileTypes component with the label -> colour mapping.
    """
    pass
