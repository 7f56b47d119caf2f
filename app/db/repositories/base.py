from typing import Any, Generic, Optional, Type, TypeVar
from sqlmodel import SQLModel, Session, select, func

# Type générique pour le modèle (Article, Borne, Partner, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : lecture par id, comptage, création, mise à jour, suppression.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    def count(self, *conditions: Any) -> int:
        """Nombre d'enregistrements satisfaisant toutes les conditions (toutes les lignes sans condition)."""
        statement = select(func.count(self.model.id))
        for condition in conditions:
            statement = statement.where(condition)
        return self.session.exec(statement).one()

    def exists(self, column: str, value: Any, *, exclude_id: Optional[int] = None) -> bool:
        """True si une autre ligne porte déjà cette valeur (contrôle d'unicité)."""
        conditions = [getattr(self.model, column) == value]
        if exclude_id is not None:
            conditions.append(self.model.id != exclude_id)
        return self.count(*conditions) > 0

    # ---------- WRITE ----------

    def _save(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def create(self, **fields: Any) -> ModelT:
        """Crée et persiste un nouvel enregistrement."""
        return self._save(self.model(**fields))

    def update(self, entity: ModelT, **changes: Any) -> ModelT:
        """Applique `changes` (déjà filtrés par le service) puis persiste."""
        for key, value in changes.items():
            setattr(entity, key, value)
        return self._save(entity)

    def delete(self, entity: ModelT) -> None:
        self.session.delete(entity)
        self.session.commit()

    def rollback(self) -> None:
        """Annule la transaction en cours (ex: après une IntegrityError)."""
        self.session.rollback()
