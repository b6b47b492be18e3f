"""Built-in artwork collection used by the static catalog."""

from __future__ import annotations

from ..models import Artwork

_PEXELS = "https://images.pexels.com/photos/{}/pexels-photo-{}.jpeg?auto=compress&cs=tinysrgb&w=400"


def _image(photo_id: int) -> str:
    return _PEXELS.format(photo_id, photo_id)


ARTWORKS: list[Artwork] = [
    Artwork(
        id="1",
        title="Mona Lisa",
        artist="Leonardo da Vinci",
        year=1503,
        period="Renaissance",
        country="Italy",
        city="Florence",
        coordinates=(11.2558, 43.7696),
        image_url=_image(1563356),
        description="The world's most famous painting, showcasing Renaissance portraiture at its finest.",
        movement="High Renaissance",
        medium="Oil on poplar",
    ),
    Artwork(
        id="2",
        title="The Starry Night",
        artist="Vincent van Gogh",
        year=1889,
        period="Post-Impressionism",
        country="France",
        city="Saint-Rémy-de-Provence",
        coordinates=(4.8324, 43.7879),
        image_url=_image(1286632),
        description="A masterpiece of swirling night sky over a sleeping village.",
        movement="Post-Impressionism",
        medium="Oil on canvas",
    ),
    Artwork(
        id="3",
        title="Guernica",
        artist="Pablo Picasso",
        year=1937,
        period="Modern",
        country="Spain",
        city="Madrid",
        coordinates=(-3.7038, 40.4168),
        image_url=_image(1647962),
        description="A powerful anti-war painting depicting the bombing of Guernica.",
        movement="Cubism",
        medium="Oil on canvas",
    ),
    Artwork(
        id="4",
        title="The Great Wave off Kanagawa",
        artist="Katsushika Hokusai",
        year=1831,
        period="Edo Period",
        country="Japan",
        city="Tokyo",
        coordinates=(139.6917, 35.6895),
        image_url=_image(1579708),
        description="Iconic Japanese woodblock print of a massive wave.",
        movement="Ukiyo-e",
        medium="Woodblock print",
    ),
    Artwork(
        id="5",
        title="Girl with a Pearl Earring",
        artist="Johannes Vermeer",
        year=1665,
        period="Baroque",
        country="Netherlands",
        city="Delft",
        coordinates=(4.3571, 52.0116),
        image_url=_image(1839919),
        description='A captivating portrait known as the "Mona Lisa of the North".',
        movement="Dutch Golden Age",
        medium="Oil on canvas",
    ),
    Artwork(
        id="6",
        title="The Persistence of Memory",
        artist="Salvador Dalí",
        year=1931,
        period="Surrealism",
        country="Spain",
        city="Figueres",
        coordinates=(2.9608, 42.2677),
        image_url=_image(1545743),
        description="Famous surrealist painting featuring melting clocks.",
        movement="Surrealism",
        medium="Oil on canvas",
    ),
    Artwork(
        id="7",
        title="The Birth of Venus",
        artist="Sandro Botticelli",
        year=1485,
        period="Renaissance",
        country="Italy",
        city="Florence",
        coordinates=(11.2558, 43.7696),
        image_url=_image(1579739),
        description="Mythological painting depicting the goddess Venus emerging from the sea.",
        movement="Early Renaissance",
        medium="Tempera on canvas",
    ),
    Artwork(
        id="8",
        title="American Gothic",
        artist="Grant Wood",
        year=1930,
        period="Modern",
        country="United States",
        city="Eldon",
        coordinates=(-92.2129, 40.9175),
        image_url=_image(1563354),
        description="Iconic American painting of rural Midwestern values.",
        movement="American Regionalism",
        medium="Oil on beaverboard",
    ),
]
