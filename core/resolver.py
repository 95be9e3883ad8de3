#!/usr/bin/env python3
"""
Reference resolution for an extracted UmlModel.

Two passes, run once extraction is complete:

1. ``resolve_references`` links ids to objects (property type, association,
   inverse end, superclass) and distributes association role documentation
   onto the matching end properties.
2. ``apply_association_deprecations`` copies association deprecation onto
   every member and owned end.

Both passes only write derived fields and recompute them from the raw ones,
so running them again yields the same model. Neither performs I/O.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.uml_model import UmlAssociation, UmlModel, UmlProperty
from meta import DEFAULT_META
from uml_types import TypeName
from utils.values import is_blank, join_paragraphs

logger = logging.getLogger(__name__)

EA_TYPE_METADATA_KEY = DEFAULT_META.uml.ea_properties_prefix + "type"


def resolve(model: UmlModel) -> UmlModel:
    resolve_references(model)
    apply_association_deprecations(model)
    return model


def resolve_references(model: UmlModel) -> None:
    for prop in model.properties.values():
        prop.type = None
        prop.primitive_type = None
        prop.association = None
        prop.inverse = None
        prop.association_documentation = None

    for prop in model.properties.values():
        _resolve_type(model, prop)
        if not is_blank(prop.association_id):
            prop.association = model.associations.get(prop.association_id)
            if prop.association is None:
                logger.debug("Property %s references unknown association %s", prop.id, prop.association_id)
        prop.inverse = _inverse_of(model, prop)

    for umlclass in model.classes.values():
        umlclass.generalization = None
        if not is_blank(umlclass.generalization_id):
            umlclass.generalization = model.classes.get(umlclass.generalization_id)
            if umlclass.generalization is None:
                logger.debug("Class %s generalizes unknown class %s", umlclass.name, umlclass.generalization_id)

    _apply_association_documentation(model)


def apply_association_deprecations(model: UmlModel) -> None:
    for association in model.associations.values():
        if not association.deprecated:
            continue
        for end_id in association.end_ids:
            prop = model.properties.get(end_id)
            if prop is None:
                continue
            prop.deprecated = True
            prop.deprecation_message = association.deprecation_message


def _resolve_type(model: UmlModel, prop: UmlProperty) -> None:
    primitive: Optional[str] = None
    if not is_blank(prop.type_id):
        prop.type = model.classes.get(prop.type_id)
        if prop.type is None:
            primitive = model.types.get(prop.type_id)
    else:
        primitive = prop.href_type
    if prop.type is None and is_blank(primitive):
        primitive = prop.metadata.get(EA_TYPE_METADATA_KEY)
    if prop.type is None and not is_blank(primitive):
        prop.primitive_type = TypeName(primitive)


def _inverse_of(model: UmlModel, prop: UmlProperty) -> Optional[UmlProperty]:
    association = prop.association
    if association is None or not association.bidirectional:
        return None
    ends = association.member_end_ids
    if len(ends) != 2:
        return None
    if prop.id == ends[0]:
        return model.properties.get(ends[1])
    if prop.id == ends[1]:
        return model.properties.get(ends[0])
    return None


def _apply_association_documentation(model: UmlModel) -> None:
    for association in model.associations.values():
        if association.bidirectional:
            _document_end(model, association, association.source_role_name, association.source_documentation)
        _document_end(model, association, association.target_role_name, association.target_documentation)


def _document_end(model: UmlModel, association: UmlAssociation,
                  role_name: Optional[str], documentation: Optional[str]) -> None:
    if is_blank(role_name) or is_blank(documentation):
        return
    for end_id in association.member_end_ids:
        prop = model.properties.get(end_id)
        if prop is not None and prop.name == role_name:
            prop.association_documentation = join_paragraphs(prop.association_documentation, documentation)
            return


__all__ = ["resolve", "resolve_references", "apply_association_deprecations"]
