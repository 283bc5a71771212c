import enum
from dataclasses import dataclass, replace


class Direction(str, enum.Enum):
    """Reading direction of the display.

    LTR: generations grow to the right, lower sibling_order is placed first.
    RTL: generations grow to the left, sibling order is reversed.
    """

    LTR = "ltr"
    RTL = "rtl"


# Card sizes (px). Width runs along the breadth axis, height along the
# generation axis.
photo_size = 50
node_padding = 4
photo_node_width = photo_size + node_padding * 2  # 58
text_node_width = photo_size + node_padding * 2  # same card width without photo
root_node_width = 120
photo_node_height = photo_size + node_padding * 2 + 17  # photo + name line, 75
text_node_height = 35
root_node_height = 100

# Gap between neighbouring cards, as a share of their average width
sibling_gap_ratio = 0.15
cousin_gap_ratio = 0.70
# circular (narrow) cards nearly touch
narrow_card_width = 50
narrow_sibling_gap_ratio = 0.01
narrow_cousin_gap_ratio = 0.05

# root card pulled back from its children along the generation axis
root_offset = 80

widening_factor = 1.0


@dataclass(frozen=True)
class LayoutConfig:
    photo_node_width: float = photo_node_width
    text_node_width: float = text_node_width
    root_node_width: float = root_node_width
    photo_node_height: float = photo_node_height
    text_node_height: float = text_node_height
    root_node_height: float = root_node_height
    sibling_gap_ratio: float = sibling_gap_ratio
    cousin_gap_ratio: float = cousin_gap_ratio
    narrow_card_width: float = narrow_card_width
    narrow_sibling_gap_ratio: float = narrow_sibling_gap_ratio
    narrow_cousin_gap_ratio: float = narrow_cousin_gap_ratio
    root_offset: float = root_offset
    widening_factor: float = widening_factor
    direction: Direction = Direction.LTR
    show_photos: bool = True

    def __post_init__(self):
        for name in (
            "photo_node_width",
            "text_node_width",
            "root_node_width",
            "photo_node_height",
            "text_node_height",
            "root_node_height",
            "widening_factor",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in (
            "sibling_gap_ratio",
            "cousin_gap_ratio",
            "narrow_card_width",
            "narrow_sibling_gap_ratio",
            "narrow_cousin_gap_ratio",
            "root_offset",
        ):
            if getattr(self, name) < 0:
                value = getattr(self, name)
                raise ValueError(f"{name} must not be negative, got {value}")
        # accept plain strings ("rtl") from callers and the command line
        object.__setattr__(self, "direction", Direction(self.direction))

    def gap(self, width_a: float, width_b: float, siblings: bool) -> float:
        """Empty space between two neighbouring cards of the given widths."""
        average = (width_a + width_b) / 2
        if average < self.narrow_card_width:
            ratio = self.narrow_sibling_gap_ratio, self.narrow_cousin_gap_ratio
        else:
            ratio = self.sibling_gap_ratio, self.cousin_gap_ratio
        return average * ratio[0 if siblings else 1]

    def separation(self, width_a: float, width_b: float, siblings: bool) -> float:
        """Center to center breadth distance between two neighbouring cards."""
        return (width_a + width_b) / 2 + self.gap(width_a, width_b, siblings)

    @property
    def min_sibling_distance(self) -> float:
        """Smallest breadth distance between two siblings with configured card widths.

        Records carrying their own ``node_width`` may sit closer if that width
        is below every configured one.
        """
        widths = (self.photo_node_width, self.text_node_width, self.root_node_width)
        return min(self.separation(w, w, siblings=True) for w in widths)

    def replace(self, **changes) -> "LayoutConfig":
        return replace(self, **changes)


DEFAULT_CONFIG = LayoutConfig()
