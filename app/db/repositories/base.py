from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Generic, Iterable, Iterator, Optional, Type, TypeVar
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, func
from sqlmodel.sql.expression import SelectOfScalar

from app.db.models.base import BaseModelDB, utcnow
from app.domain.errors import ConflictError

# Type générique pour le modèle (SiteCategory, Produit, etc.)
ModelT = TypeVar("ModelT", bound=BaseModelDB)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards avec suppression douce.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : create, read, update, soft delete, restore, purge, count.
    👉 Toutes les lectures excluent les lignes supprimées (deleted_at non NULL)
       sauf si `include_deleted=True`.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- HELPERS ----------

    def _live(self, statement, include_deleted: bool = False):
        """Ajoute le filtre `deleted_at IS NULL` à une requête, sauf demande explicite."""
        if include_deleted:
            return statement
        return statement.where(self.model.deleted_at.is_(None))

    def _select(self, include_deleted: bool = False) -> SelectOfScalar[ModelT]:
        return self._live(select(self.model), include_deleted)

    # ---------- READ ----------

    def count(self, *, include_deleted: bool = False, **filters: Any) -> int:
        """Retourne le nombre d’enregistrements correspondant aux filtres d'égalité."""
        statement = self._live(select(func.count(self.model.id)), include_deleted)
        for column, value in filters.items():
            statement = statement.where(getattr(self.model, column) == value)
        return self.session.exec(statement).one()

    def get(self, id_: Any, *, include_deleted: bool = False) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None (absent ou supprimé)."""
        statement = self._select(include_deleted).where(self.model.id == id_)
        return self.session.exec(statement).first()

    def get_many(self, ids: Iterable[Any], *, include_deleted: bool = False) -> Dict[Any, ModelT]:
        """Charge plusieurs enregistrements en une requête, indexés par identifiant."""
        wanted = {i for i in ids if i is not None}
        if not wanted:
            return {}
        statement = self._select(include_deleted).where(self.model.id.in_(wanted))
        return {e.id: e for e in self.session.exec(statement).all()}

    def get_for_update(self, id_: Any) -> Optional[ModelT]:
        """Comme get(), mais verrouille la ligne jusqu'au commit (SELECT ... FOR UPDATE)."""
        statement = self._select().where(self.model.id == id_).with_for_update()
        return self.session.exec(statement).first()

    def exists_live(self, *, exclude_id: Any = None, **filters: Any) -> bool:
        """Vrai si une ligne vivante correspond aux filtres (hors `exclude_id`)."""
        statement = self._select()
        for column, value in filters.items():
            statement = statement.where(getattr(self.model, column) == value)
        if exclude_id is not None:
            statement = statement.where(self.model.id != exclude_id)
        return self.session.exec(statement.limit(1)).first() is not None

    # ---------- CREATE ----------

    def create(self, *, commit: bool = True, **fields) -> ModelT:
        """
        Crée et persiste un nouvel enregistrement.
        commit=False permet d'orchestrer une transaction globale au niveau service.
        """
        entity = self.model(**fields)
        self.session.add(entity)
        if commit:
            self.session.commit()
            self.session.refresh(entity)
        else:
            # flush pour obtenir l'ID sans commit (utile pour FKs)
            self.session.flush()
        return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, *, commit: bool = True, **changes) -> ModelT:
        """
        Met à jour un enregistrement existant (updated_at rafraîchi automatiquement).
        commit=False permet d'orchestrer une transaction globale au niveau service.
        """
        for key, value in changes.items():
            setattr(entity, key, value)
        entity.updated_at = utcnow()
        self.session.add(entity)
        if commit:
            self.session.commit()
            self.session.refresh(entity)
        else:
            self.session.flush()
        return entity

    # ---------- SOFT DELETE / RESTORE ----------

    def soft_delete(self, entity: ModelT, *, commit: bool = True, when: Optional[datetime] = None) -> ModelT:
        """Marque la ligne comme supprimée (les données sont conservées)."""
        return self.update(entity, commit=commit, deleted_at=when or utcnow())

    def restore(self, entity: ModelT, *, commit: bool = True) -> ModelT:
        """Efface `deleted_at` : la ligne redevient visible."""
        return self.update(entity, commit=commit, deleted_at=None)

    # ---------- DELETE ----------

    def purge(self, entity: ModelT, *, commit: bool = True) -> None:
        """
        Supprime définitivement un enregistrement.
        commit=False permet d'orchestrer une transaction globale au niveau service.
        """
        self.session.delete(entity)
        if commit:
            self.session.commit()
        else:
            self.session.flush()

    @contextmanager
    def unique_guard(self, message: str) -> Iterator[None]:
        """
        Filet de sécurité des index uniques : si deux écritures concurrentes passent
        la pré-vérification, la base rejette la seconde -> ConflictError.
        """
        try:
            yield
        except IntegrityError as e:
            self.session.rollback()
            raise ConflictError(message) from e
