"""
Naming transformer.

Rewrites model names to UpperCamelCase and field and index names to
lowerCamelCase, recording each original name as a mapping annotation so the
storage names do not change. Every reference to a renamed field or model
(index field lists, relation field types, `@relation(fields:, references:)`)
is rewritten in the same pass.

The transformer mutates the Schema it is given. Callers hand it a freshly
parsed Schema and must not share that instance with anything else while
the pass runs.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from .constants import DefaultConfig
from .domain.models import ArrayValue, Constant, Field, Model, Schema
from .domain.naming import NamingConventions

logger = logging.getLogger(__name__)


@dataclass
class TransformOptions:
    """
    Mapping-annotation policy.

    Attributes:
        map_unchanged_names: Write `@map`/`@@map` even when the conversion
            leaves the name as it was
        keep_existing_maps: Leave an existing `@map`/`@@map` untouched, since
            it already names the storage object. A strict rename-and-map
            pass always overwrites it with the pre-rename name; set this to
            False for that behaviour. Note that overwriting re-points a
            mapped model or field at a storage object named after the
            schema identifier, which may not exist.
    """

    map_unchanged_names: bool = DefaultConfig.MAP_UNCHANGED_NAMES
    keep_existing_maps: bool = DefaultConfig.KEEP_EXISTING_MAPS


@dataclass
class TransformSummary:
    """Counts of what one transform pass changed."""

    models_renamed: int = 0
    fields_renamed: int = 0
    indexes_renamed: int = 0
    mappings_added: int = 0
    relations_updated: int = 0

    @property
    def total_renames(self) -> int:
        return self.models_renamed + self.fields_renamed + self.indexes_renamed


class NamingTransformer:
    """Applies the naming conventions to every model of a schema."""

    def __init__(
        self,
        options: Optional[TransformOptions] = None,
        naming: Optional[NamingConventions] = None,
    ):
        self.options = options or TransformOptions()
        self.naming = naming or NamingConventions()

    def transform(self, schema: Schema) -> TransformSummary:
        """
        Rename models, fields and indexes in place.

        Args:
            schema: A freshly parsed schema, exclusively owned by the caller

        Returns:
            What the pass changed
        """
        summary = TransformSummary()
        models = schema.datamodel.models
        model_renames: Dict[str, str] = {}
        model_names = {model.name for model in models}

        for model in models:
            original_name = model.name
            model.name = self.naming.model_name(original_name)
            model_renames[original_name] = model.name
            if model.name != original_name:
                summary.models_renamed += 1
            if self._assign_database_name(model, original_name):
                summary.mappings_added += 1
            self._check_identifier(model.name, f"model '{original_name}'")

            self._rename_fields(model, model_names, summary)
            self._rename_indexes(model, summary)
            logger.debug(f"Renamed model '{original_name}' to '{model.name}'")

        self._check_duplicates([model.name for model in models], "model")

        for model in models:
            for model_field in model.fields:
                if self._update_relation(model_field, model_renames):
                    summary.relations_updated += 1

        return summary

    def _rename_fields(self, model: Model, model_names: Set[str], summary: TransformSummary) -> None:
        for model_field in model.fields:
            original_name = model_field.name
            model_field.name = self.naming.field_name(original_name)
            if model_field.name != original_name:
                summary.fields_renamed += 1
            # Relation fields have no column of their own to map
            is_relation = model_field.field_type.name in model_names
            if not is_relation and self._assign_database_name(model_field, original_name):
                summary.mappings_added += 1
            self._check_identifier(model_field.name, f"field '{model.name}.{original_name}'")

        self._check_duplicates([f.name for f in model.fields], f"field in model '{model.name}'")

    def _rename_indexes(self, model: Model, summary: TransformSummary) -> None:
        for index in model.indexes:
            # The display name follows the storage name, never the reverse
            if index.db_name is not None:
                new_name = self.naming.index_name(index.db_name)
                if new_name != index.name:
                    summary.indexes_renamed += 1
                index.name = new_name
            for index_field in index.fields:
                index_field.name = self._rename_path(index_field.name)

    def _rename_path(self, path: str) -> str:
        """Rename the leading field of a dotted path; composite type fields keep their names."""
        head, dot, rest = path.partition(".")
        return self.naming.field_name(head) + dot + rest

    def _update_relation(self, model_field: Field, model_renames: Dict[str, str]) -> bool:
        """Point relation fields at renamed models and renamed fields."""
        changed = False
        target = model_renames.get(model_field.field_type.name)
        if target is not None and target != model_field.field_type.name:
            model_field.field_type.name = target
            changed = True

        relation = model_field.relation
        if relation is None:
            return changed

        for argument_name in ("fields", "references"):
            argument = relation.argument(argument_name)
            if argument is None or not isinstance(argument.value, ArrayValue):
                continue
            for item in argument.value.items:
                if isinstance(item, Constant):
                    new_name = self._rename_path(item.name)
                    changed = changed or new_name != item.name
                    item.name = new_name
        return changed

    def _assign_database_name(self, entity, original_name: str) -> bool:
        """Record the original name as the mapping annotation, per the options."""
        if entity.database_name is not None and self.options.keep_existing_maps:
            return False
        if entity.name == original_name and not self.options.map_unchanged_names:
            return False
        entity.database_name = original_name
        return True

    def _check_identifier(self, name: str, description: str) -> None:
        if not self.naming.is_valid_identifier(name):
            logger.warning(f"Renamed {description} to '{name}', which is not a valid identifier")

    @staticmethod
    def _check_duplicates(names: List[str], description: str) -> None:
        for name, count in Counter(names).items():
            if count > 1:
                logger.warning(f"Renaming produced {count} {description} entries named '{name}'")


def transform_names(schema: Schema, options: Optional[TransformOptions] = None) -> Schema:
    """Apply the naming transform to a schema and return it."""
    NamingTransformer(options).transform(schema)
    return schema
