"""Curated high-traffic national park locations."""

from parkcast.config.schema import LocationConfig

DEFAULT_LOCATIONS: list[LocationConfig] = [
    LocationConfig(slug="old-faithful", name="Old Faithful (Yellowstone)", lat=44.4605, lon=-110.8282),
    LocationConfig(
        slug="yosemite-valley",
        name="Yosemite Valley Visitor Center (Yosemite)",
        lat=37.7433,
        lon=-119.5760,
    ),
    LocationConfig(slug="mather-point", name="Mather Point (Grand Canyon)", lat=36.0610, lon=-112.1080),
    LocationConfig(slug="angels-landing", name="Angels Landing (Zion)", lat=37.2694, lon=-112.9481),
    LocationConfig(
        slug="clingmans-dome",
        name="Clingmans Dome (Great Smoky Mountains)",
        lat=35.5628,
        lon=-83.4986,
    ),
    LocationConfig(
        slug="paradise",
        name="Paradise Visitor Center (Mount Rainier)",
        lat=46.7867,
        lon=-121.7345,
    ),
    LocationConfig(slug="denali-entrance", name="Denali Park Entrance (Alaska)", lat=63.7284, lon=-148.8866),
    LocationConfig(slug="logan-pass", name="Logan Pass (Glacier)", lat=48.6913, lon=-113.7176),
    LocationConfig(slug="cadillac-mountain", name="Cadillac Mountain (Acadia)", lat=44.3513, lon=-68.2266),
    LocationConfig(
        slug="coe-visitor-center",
        name="Ernest F. Coe Visitor Center (Everglades)",
        lat=25.3953,
        lon=-80.5832,
    ),
    LocationConfig(slug="delicate-arch", name="Delicate Arch Trailhead (Arches)", lat=38.7340, lon=-109.5013),
]
