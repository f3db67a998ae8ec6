from dataclasses import dataclass, asdict


# fmt: off
@dataclass(frozen=True)
class ShortenResult:
    original_url: str  # URL exactly as submitted by the client
    short_url: str     # Fully-qualified short URL (base URL + shortcode)
    short_code: str    # Newly minted shortcode or accepted custom alias

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
# fmt: on
