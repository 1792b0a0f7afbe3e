from pydantic import BaseModel

from app.data import Card


class CardOut(BaseModel):
    id: int
    title: str
    artist: str
    uri: str
    img: str
    cover: str
    description: str


def serialize_card(card: Card) -> CardOut:
    return CardOut(
        id=card.id,
        title=card.title,
        artist=card.artist,
        uri=card.uri,
        img=card.img,
        cover=card.cover,
        description=card.description,
    )
