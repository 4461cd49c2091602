"""Locale-scoped storage for translatable attributes.

Translatable attributes of an entity live in a satellite table holding one
row per (entity, locale). :class:`TranslationStore` owns every read and
write of that table and routes query predicates either to the base table
or to the satellite table.
"""

from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from blogcore.core.bases.base_repository import ConflictError, RepositoryError
from blogcore.core.utils.logging import get_logger

EntityT = TypeVar("EntityT", bound=SQLModel)
TranslationT = TypeVar("TranslationT", bound=SQLModel)

logger = get_logger("translations")


class TranslationStore(Generic[EntityT, TranslationT]):
    def __init__(
        self,
        session: Session,
        model: Type[EntityT],
        translation_model: Type[TranslationT],
        owner_key: str,
        fields: Sequence[str],
        title_registry: Optional[Type[SQLModel]] = None,
    ):
        self.session = session
        self.model = model
        self.translation_model = translation_model
        self.owner_key = owner_key
        self.fields: Tuple[str, ...] = tuple(fields)
        self.title_registry = title_registry

    @property
    def owner_column(self) -> Any:
        return getattr(self.translation_model, self.owner_key)

    @property
    def translated_attributes(self) -> set:
        """Names routed to the satellite table, including ``locale``."""
        return set(self.fields) | {"locale"}

    # ----------------- READ ----------------- #
    def get_translation(self, entity_id: Any, locale: str) -> Optional[TranslationT]:
        """Row for exactly ``locale``; never falls back to another locale."""
        stmt = select(self.translation_model).where(
            self.owner_column == entity_id,
            self.translation_model.locale == locale,  # type: ignore
        )
        return self.session.exec(stmt).first()

    def translations_for(self, entity_id: Any) -> List[TranslationT]:
        stmt = (
            select(self.translation_model)
            .where(self.owner_column == entity_id)
            .order_by(self.translation_model.locale)  # type: ignore
        )
        return list(self.session.exec(stmt).all())

    def locales_for(self, entity_id: Any) -> List[str]:
        return [row.locale for row in self.translations_for(entity_id)]  # type: ignore

    def query_by_translated_field(
        self, field: str, value: Any, locale: Optional[str] = None
    ) -> List[Any]:
        """Ids of the entities whose ``field`` equals ``value``."""
        if field not in self.translated_attributes:
            raise ValueError(f"{field!r} is not a translated attribute")
        stmt = select(self.owner_column).where(
            getattr(self.translation_model, field) == value
        )
        if locale is not None:
            stmt = stmt.where(self.translation_model.locale == locale)  # type: ignore
        stmt = stmt.distinct().order_by(self.owner_column)
        return list(self.session.exec(stmt).all())

    # ----------------- WRITE ----------------- #
    def upsert_translation(
        self, entity_id: Any, locale: str, fields: Mapping[str, Any]
    ) -> TranslationT:
        """Write the full translation buffer for one locale.

        Every translated column is replaced; names missing from ``fields``
        are cleared rather than kept from the stored row.
        """
        unknown = set(fields) - set(self.fields)
        if unknown:
            raise ValueError(f"Unknown translated fields: {sorted(unknown)}")

        values = {name: fields.get(name) for name in self.fields}
        row = self.get_translation(entity_id, locale)
        if row is None:
            row = self.translation_model(
                **{self.owner_key: entity_id, "locale": locale}, **values
            )
        else:
            for name, value in values.items():
                setattr(row, name, value)

        try:
            self.session.add(row)
            self.session.flush()
            self.claim_titles(entity_id)
        except SQLAlchemyError as e:
            self.session.rollback()
            error = ConflictError if isinstance(e, IntegrityError) else RepositoryError
            raise error(
                f"Could not store {locale} translation for {self.model.__name__} "
                f"{entity_id}: {e}"
            ) from e
        logger.debug(
            "Stored %s translation for %s %s", locale, self.model.__name__, entity_id
        )
        return row

    def claim_titles(self, entity_id: Any) -> None:
        """Make the title registry match the titles the entity uses now.

        A title held by another entity fails the flush with an integrity
        error, so concurrent writers cannot both keep it.
        """
        if self.title_registry is None:
            return
        owner = self.session.get(self.model, entity_id)
        titles = set(
            self.session.exec(
                select(self.translation_model.title).where(  # type: ignore
                    self.owner_column == entity_id,
                    self.translation_model.title.is_not(None),  # type: ignore
                )
            ).all()
        )
        claims = owner.titles  # type: ignore
        for claim in list(claims):
            if claim.title in titles:
                titles.discard(claim.title)
            else:
                claims.remove(claim)
        self.session.flush()
        for title in sorted(titles):
            claims.append(
                self.title_registry(**{self.owner_key: entity_id, "title": title})
            )
        self.session.flush()

    # ----------------- QUERY ----------------- #
    def split_conditions(
        self, conditions: Mapping[str, Any]
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """Split equality predicates into (base table, satellite table)."""
        base: Dict[str, Any] = {}
        translated: Dict[str, Any] = {}
        for key, value in conditions.items():
            if key in self.translated_attributes:
                translated[key] = value
            elif key in self.model.model_fields:
                base[key] = value
            else:
                raise ValueError(
                    f"{self.model.__name__} has no attribute named {key!r}"
                )
        return base, translated

    def join_clause(self, locale: str) -> Any:
        return and_(
            self.owner_column == self.model.id,  # type: ignore
            self.translation_model.locale == locale,  # type: ignore
        )

    def with_translations(self, locale: str, stmt: Any = None, **conditions) -> Any:
        """Join ``stmt`` (default: all entities) to the ``locale`` rows.

        Entities without a row for ``locale`` drop out of the result.
        """
        base, translated = self.split_conditions(conditions)
        translated.pop("locale", None)
        if stmt is None:
            stmt = select(self.model)
        stmt = stmt.join(self.translation_model, self.join_clause(locale))
        for key, value in base.items():
            stmt = stmt.where(getattr(self.model, key) == value)
        for key, value in translated.items():
            stmt = stmt.where(getattr(self.translation_model, key) == value)
        return stmt
