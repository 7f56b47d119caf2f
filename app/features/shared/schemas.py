from typing import Optional
from pydantic import BaseModel


class MessageOut(BaseModel):
    """Réponse standard des opérations d'écriture : {id, message}."""
    id: Optional[int] = None
    message: str


class CategoryCountOut(BaseModel):
    category: str
    count: int
