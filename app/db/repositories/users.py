"""
➡️ But : Accès aux comptes du back-office.

L'email est l'identifiant de connexion : il est comparé en minuscules.
"""

from typing import Optional
from sqlmodel import select, func

from app.db.repositories.base import BaseRepository
from app.db.models.users import User

class UserRepository(BaseRepository[User]):
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        return self.session.exec(stmt).first()
