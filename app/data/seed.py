"""Built-in content card deck."""

from typing import Dict, List

DEFAULT_CARDS: List[Dict[str, str]] = [
    {
        "img": "/art/art1.png",
        "title": "Farewell Transmission",
        "artist": "Songs: Ohia",
        "uri": "spotify:track:5Plx6OhvSukqCRdZ52wUXz",
        "cover": "/art/magnoliaElectricCo.png",
        "description": "A painting by Gustave Courbet",
    },
    {
        "img": "/art/art2.jpg",
        "title": "Archangel",
        "artist": "Burial",
        "uri": "spotify:track:6evpAJCR5GeeHDGgv3aXb3",
        "cover": "/art/cover1.png",
        "description": "From the movie Spirited Away",
    },
    {
        "img": "/art/art3.png",
        "title": "Pagan Poetry",
        "artist": "Björk",
        "uri": "spotify:track:3Te7GWFEecCGPpkWVTjJ1h",
        "cover": "/art/vespertine.png",
        "description": "From the animated series Love, Death & Robots",
    },
]
