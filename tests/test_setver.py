import setver as sv


def test_versions():

    v0 = sv.version("{}")
    v1 = sv.version("{{}}")
    v2 = sv.version("{{},{{}}}")

    assert v0.cardinality() == 0
    assert str(v0) == "{}"

    assert v1.cardinality() == 1
    assert v1.children[0] == v0
    assert sv.is_subset(v0, v1)
    assert not sv.is_subset(v1, v0)

    assert v2.cardinality() == 2
    assert str(v2) == "{{},{{}}}"

    assert sv.add_child_version(v0, v0) == v1
    assert sv.partial_compare("{{}}", "{{{}}}") == sv.PartialOrdering.INCOMPARABLE


def test_canonical_form():
    assert sv.to_string("{ {} , {} , {{}} }") == "{{},{{}}}"
    assert sv.to_string("{{{}},{}}") == "{{},{{}}}"
    assert sv.version("{{},{}}") == sv.version("{{}}")
    assert sv.version("{{},{}}").cardinality() == 1

    assert hash(sv.version("{{{}},{}}")) == hash(sv.version("{ {}, {{}}, {} }"))


def test_coercion():
    v = sv.version("{{}}")

    assert sv.version(v) is v
    assert sv.version(b"{{}}") == v
    assert sv.version(1) == v
    assert sv.equals("{{}}", 1)
    assert sv.is_superset("{{},{{}}}", "{{}}")


def test_operators():
    v0 = sv.version("{}")
    v1 = sv.version("{{}}")
    v2 = sv.version("{{},{{}}}")
    other = sv.version("{{{}}}")

    assert v0 < v1 < v2
    assert v2 > v1 >= v1
    assert v1 <= v1
    assert not v1 < v1

    assert not v1 < other
    assert not v1 > other
    assert v1 != other

    assert v0 in v1
    assert other not in v1
    assert "{}" not in v1


def test_sets_of_versions():
    versions = {sv.version("{{},{{}}}"), sv.version("{ {{}}, {} }"), sv.version("{}")}

    assert len(versions) == 2

    sorted_versions = sv.sort_versions(["{{},{{}}}", "{{{}}}", "{}", "{{}}"])
    assert [str(v) for v in sorted_versions] == ["{}", "{{}}", "{{{}}}", "{{},{{}}}"]

    maximal = sv.maximal_versions(["{}", "{{}}", "{{{}}}", "{{},{{}}}", "{{}}"])
    assert [str(v) for v in maximal] == ["{{},{{}}}"]

    maximal = sv.maximal_versions(["{{{{}}}}", "{}", "{{{}}}", "{{},{{}}}"])
    assert [str(v) for v in maximal] == ["{{{{}}}}", "{{},{{}}}"]
