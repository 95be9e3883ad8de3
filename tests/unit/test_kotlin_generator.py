#!/usr/bin/env python3
"""
Unit tests for Kotlin domain class rendering from a resolved model.
"""

from __future__ import annotations

import os

import pytest

from app.config import MarkerConfig
from core.errors import GenerationIOError, InheritanceCycleError
from core.resolver import resolve
from core.uml_model import UmlAssociation, UmlClass, UmlModel, UmlProperty
from gen.kotlin.generator import DomainClassGenerator, ImportScope, builtin_types
from types_profiles import load_profiles
from uml_types import ElementName, XmiId

ROOT = "no.fint.model"


def _prop(xmi: str, name: str, lower: str | None = None, upper: str | None = None, **kwargs) -> UmlProperty:
    return UmlProperty(id=XmiId(xmi), name=name, lower=lower, upper=upper, **kwargs)


def _mk_class(xmi: str, name: str, path: list[str] | None = None, props: list[UmlProperty] | None = None,
              entity: bool = True, **kwargs) -> UmlClass:
    return UmlClass(
        id=XmiId(xmi),
        name=ElementName(name),
        package_path=list(path or []),
        properties=list(props or []),
        stereotypes={"hovedklasse"} if entity else set(),
        **kwargs,
    )


def _mk_model(*classes: UmlClass, associations: list[UmlAssociation] | None = None) -> UmlModel:
    model = UmlModel()
    for c in classes:
        model.classes[c.id] = c
        for p in c.properties:
            model.properties[p.id] = p
    for a in associations or []:
        model.associations[a.id] = a
    return resolve(model)


def _render(model: UmlModel, class_id: str, package: str = ROOT) -> str:
    generator = DomainClassGenerator(model, package)
    return generator.render(model.classes[XmiId(class_id)])


def test_required_string_property_in_nested_package():
    person = _mk_class("C1", "Person", ["Felles"], [_prop("A1", "navn", "1", "1", href_type="String")])
    model = _mk_model(person)
    generator = DomainClassGenerator(model, ROOT)
    assert generator.render(person) == (
        "package no.fint.model.felles\n"
        "\n"
        "import no.fint.model.FintModelObject\n"
        "\n"
        "open class Person(\n"
        "    val navn: String\n"
        ") : FintModelObject\n"
    )
    assert generator.source_path("out", person) == os.path.join("out", "no", "fint", "model", "felles", "Person.kt")


def test_subclass_forwards_inherited_fields():
    person = _mk_class("C1", "Person", ["Felles"], [_prop("A1", "navn", "1", "1", href_type="String")])
    skole = _mk_class("C2", "Skole", ["Felles"], [_prop("A2", "skolenummer", "0", "1", href_type="String")],
                      generalization_id=XmiId("C1"))
    model = _mk_model(person, skole)
    assert _render(model, "C2") == (
        "package no.fint.model.felles\n"
        "\n"
        "open class Skole(\n"
        "    navn: String,\n"
        "    val skolenummer: String? = null\n"
        ") : Person(navn = navn)\n"
    )


def test_inherited_fields_come_ancestor_first():
    a = _mk_class("C1", "A", props=[_prop("P1", "a", "1", "1")])
    b = _mk_class("C2", "B", props=[_prop("P2", "b", "1", "1")], generalization_id=XmiId("C1"))
    c = _mk_class("C3", "C", props=[_prop("P3", "c", "1", "1")], generalization_id=XmiId("C2"))
    rendered = _render(_mk_model(a, b, c), "C3")
    assert rendered.index("    a: String,") < rendered.index("    b: String,") < rendered.index("    val c: String")
    assert ") : B(a = a, b = b)" in rendered


def test_repeated_fields_use_empty_collections():
    entity = _mk_class("C1", "Skole", props=[_prop("A1", "telefonnummer", "0", "*")])
    value = _mk_class("C2", "Kontaktinformasjon", props=[_prop("A2", "telefonnummer", "0", "*")], entity=False)
    model = _mk_model(entity, value)
    assert "    val telefonnummer: Set<String> = emptySet()\n" in _render(model, "C1")
    assert "    val telefonnummer: List<String> = emptyList()\n" in _render(model, "C2")


def test_value_type_gets_complex_marker():
    value = _mk_class("C1", "Periode", ["Felles"], [_prop("A1", "start", "1", "1", href_type="date")], entity=False)
    rendered = _render(_mk_model(value), "C1")
    assert rendered == (
        "package no.fint.model.felles\n"
        "\n"
        "import no.fint.model.FintComplexDatatypeObject\n"
        "import no.fint.model.FintModelObject\n"
        "\n"
        "open class Periode(\n"
        "    val start: String\n"
        ") : FintModelObject, FintComplexDatatypeObject\n"
    )


def test_abstract_class_is_not_a_value_type():
    aktor = _mk_class("C1", "Aktør", props=[_prop("A1", "kjønn")], entity=False, abstract=True)
    assert _render(_mk_model(aktor), "C1") == (
        "package no.fint.model\n"
        "\n"
        "abstract class Aktor(\n"
        "    val kjonn: String? = null\n"
        ") : FintModelObject\n"
    )


def test_value_subtype_keeps_complex_marker():
    base = _mk_class("C1", "Adresse", entity=False)
    sub = _mk_class("C2", "Postadresse", entity=False, generalization_id=XmiId("C1"))
    rendered = _render(_mk_model(base, sub), "C2")
    assert rendered.endswith("open class Postadresse : Adresse(), FintComplexDatatypeObject\n")
    assert "FintModelObject" not in rendered


def test_documentation_and_deprecation():
    prop = _prop("A1", "epost", "1", "1", documentation="Gammel */ adresse.", deprecated=True,
                 deprecation_message="Bruk \"kontakt\".")
    cls = _mk_class("C1", "Kontakt", props=[prop], documentation="Linje 1\n\nSe /* her",
                    deprecated=True, deprecation_message=None)
    assert _render(_mk_model(cls), "C1") == (
        "package no.fint.model\n"
        "\n"
        "/**\n"
        " * Linje 1\n"
        " *\n"
        " * Se &#47;* her\n"
        " */\n"
        "@Deprecated(\"Deprecated\")\n"
        "open class Kontakt(\n"
        "    /**\n"
        "     * Gammel *&#47; adresse.\n"
        "     */\n"
        "    @Deprecated(\"Bruk \\\"kontakt\\\"\")\n"
        "    val epost: String\n"
        ") : FintModelObject\n"
    )


def test_inherited_fields_carry_no_documentation():
    base = _mk_class("C1", "Person", props=[_prop("A1", "navn", "1", "1", documentation="Navnet.", deprecated=True)])
    sub = _mk_class("C2", "Elev", generalization_id=XmiId("C1"))
    rendered = _render(_mk_model(base, sub), "C2")
    assert "Navnet." not in rendered
    assert "@Deprecated" not in rendered
    assert "    navn: String\n" in rendered


def test_deprecated_association_end_message_loses_trailing_period():
    e1 = _prop("E1", "skole", "0", "1", type_id=XmiId("C2"), association_id=XmiId("AS1"))
    e2 = _prop("E2", "person", "0", "*", type_id=XmiId("C1"), association_id=XmiId("AS1"))
    association = UmlAssociation(id=XmiId("AS1"), member_end_ids=[e1.id, e2.id],
                                 deprecated=True, deprecation_message="Utgått.")
    model = _mk_model(_mk_class("C1", "Person", props=[e1]), _mk_class("C2", "Skole", props=[e2]),
                      associations=[association])
    assert "    @Deprecated(\"Utgått\")\n    val skole: Skole? = null\n" in _render(model, "C1")
    assert "    @Deprecated(\"Utgått\")\n    val person: Set<Person> = emptySet()\n" in _render(model, "C2")


def test_reserved_property_names_are_escaped_in_forwarding():
    base = _mk_class("C1", "Base", props=[_prop("A1", "class", "1", "1")])
    sub = _mk_class("C2", "Sub", generalization_id=XmiId("C1"))
    model = _mk_model(base, sub)
    assert "    val `class`: String\n" in _render(model, "C1")
    assert ") : Base(`class` = `class`)\n" in _render(model, "C2")


def test_primitive_types_map_through_profile():
    cls = _mk_class("C1", "Tall", props=[
        _prop("A1", "a", "1", "1", href_type="Integer"),
        _prop("A2", "b", "1", "1", href_type="boolean"),
        _prop("A3", "c", "1", "1", href_type="Double"),
        _prop("A4", "d", "1", "1", href_type="long"),
        _prop("A5", "e", "1", "1", href_type="Identifikator"),
        _prop("A6", "f", "1", "1"),
    ])
    rendered = _render(_mk_model(cls), "C1")
    for line in ("val a: Int,", "val b: Boolean,", "val c: Double,", "val d: Long,",
                 "val e: String,", "val f: String\n"):
        assert line in rendered


def test_fields_are_sorted_by_name():
    cls = _mk_class("C1", "Sortert", props=[_prop("A1", "zeta"), _prop("A2", "alfa"), _prop("A3", "my")])
    rendered = _render(_mk_model(cls), "C1")
    assert rendered.index("alfa") < rendered.index("my") < rendered.index("zeta")


def test_cross_package_import_and_name_clash():
    felles = _mk_class("C1", "Adresse", ["Felles"])
    utdanning = _mk_class("C2", "Adresse", ["Utdanning"])
    holder = _mk_class("C3", "Holder", props=[
        _prop("A1", "a", type_id=XmiId("C1")),
        _prop("A2", "b", type_id=XmiId("C2")),
    ])
    assert _render(_mk_model(felles, utdanning, holder), "C3") == (
        "package no.fint.model\n"
        "\n"
        "import no.fint.model.felles.Adresse\n"
        "\n"
        "open class Holder(\n"
        "    val a: Adresse? = null,\n"
        "    val b: no.fint.model.utdanning.Adresse? = null\n"
        ") : FintModelObject\n"
    )


def test_reference_to_own_simple_name_in_other_package_stays_qualified():
    other = _mk_class("C1", "Person", ["Felles"])
    own = _mk_class("C2", "Person", ["Utdanning"], [_prop("A1", "felles", "1", "1", type_id=XmiId("C1"))])
    rendered = _render(_mk_model(other, own), "C2")
    assert "    val felles: no.fint.model.felles.Person\n" in rendered
    assert "import no.fint.model.felles.Person" not in rendered


def test_model_class_named_like_builtin_stays_qualified():
    string_cls = _mk_class("C1", "String", ["Felles"])
    person = _mk_class("C2", "Person", ["Utdanning"], [
        _prop("A1", "navn", href_type="String"),
        _prop("A2", "verdi", type_id=XmiId("C1")),
        _prop("A3", "verdier", "0", "*", type_id=XmiId("C1")),
    ])
    assert _render(_mk_model(string_cls, person), "C2") == (
        "package no.fint.model.utdanning\n"
        "\n"
        "import no.fint.model.FintModelObject\n"
        "\n"
        "open class Person(\n"
        "    val navn: String? = null,\n"
        "    val verdi: no.fint.model.felles.String? = null,\n"
        "    val verdier: Set<no.fint.model.felles.String> = emptySet()\n"
        ") : FintModelObject\n"
    )


def test_own_class_named_like_builtin_qualifies_the_builtin():
    own = _mk_class("C1", "Set", props=[
        _prop("A1", "tekst", "1", "1", href_type="String"),
        _prop("A2", "medlemmer", "0", "*", href_type="String"),
    ])
    rendered = _render(_mk_model(own), "C1")
    assert "    val medlemmer: kotlin.collections.Set<String> = emptySet(),\n" in rendered
    assert "    val tekst: String\n" in rendered
    assert "import" not in rendered


def test_builtin_types_come_from_profile():
    profile = load_profiles()
    builtins = builtin_types(profile)
    assert builtins["String"] == "kotlin"
    assert builtins["Int"] == "kotlin"
    assert builtins["List"] == "kotlin.collections"
    assert builtins["Set"] == "kotlin.collections"


def test_import_scope_builtins_are_never_imported():
    scope = ImportScope("a.b", "Self", {"String": "kotlin"})
    assert scope.reference("kotlin", "String") == "String"
    assert scope.reference("c.d", "String") == "c.d.String"
    assert scope.imports == []


def test_import_scope_binds_first_name():
    scope = ImportScope("a.b", "Self")
    assert scope.reference("a.b", "Self") == "Self"
    assert scope.reference("x.y", "Self") == "x.y.Self"
    assert scope.reference("c", "Other") == "Other"
    assert scope.reference("d", "Other") == "d.Other"
    assert scope.reference("a.b", "Local") == "Local"
    assert scope.imports == ["c.Other"]


def test_custom_markers():
    markers = MarkerConfig(package="org.example.base", root_entity="Entity", complex_datatype="Value",
                           root_entity_stereotype="entity")
    cls = _mk_class("C1", "Ting", entity=False)
    cls.stereotypes = {"entity"}
    model = _mk_model(cls)
    rendered = DomainClassGenerator(model, "org.example", markers=markers).render(cls)
    assert rendered == (
        "package org.example\n"
        "\n"
        "import org.example.base.Entity\n"
        "\n"
        "open class Ting : Entity\n"
    )


def test_generation_is_byte_identical(tmp_path):
    person = _mk_class("C1", "Person", ["Felles"], [_prop("A1", "navn", "1", "1")])
    skole = _mk_class("C2", "Skole", ["Utdanning"], [_prop("A2", "elever", "0", "*", type_id=XmiId("C1"))])
    model = _mk_model(person, skole)
    out = tmp_path / "out"

    assert DomainClassGenerator(model, ROOT).generate(str(out)) == 2
    path = out / "no" / "fint" / "model" / "utdanning" / "Skole.kt"
    first = path.read_bytes()
    assert b"import no.fint.model.felles.Person\n" in first

    assert DomainClassGenerator(model, ROOT).generate(str(out)) == 2
    assert path.read_bytes() == first


def test_cyclic_generalization_fails_generation(tmp_path):
    a = _mk_class("C1", "A", generalization_id=XmiId("C2"))
    b = _mk_class("C2", "B", generalization_id=XmiId("C1"))
    with pytest.raises(InheritanceCycleError):
        DomainClassGenerator(_mk_model(a, b), ROOT).generate(str(tmp_path))


def test_unwritable_output_raises_generation_io_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    model = _mk_model(_mk_class("C1", "Person", ["Felles"]))
    with pytest.raises(GenerationIOError):
        DomainClassGenerator(model, ROOT).generate(str(blocker))
