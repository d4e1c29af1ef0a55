from werkzeug.datastructures import MultiDict

from directory.completeness import REQUIRED_FIELDS
from directory.filters import FilterSpec, apply_display_defaults, filter_profiles
from directory.normalizer import NOT_SPECIFIED


def _profile(doc_id, **fields):
    doc = {"id": doc_id, "isPublic": True}
    doc.update(fields)
    return doc


def _ids(users):
    return [u["id"] for u in users]


def test_missing_display_fields_show_sentinel():
    user = apply_display_defaults({"id": "a"})
    for name in REQUIRED_FIELDS:
        assert user[name] == NOT_SPECIFIED
    assert user["isPublic"] is False


def test_display_defaults_do_not_touch_stored_values():
    doc = {"id": "a", "location": "Remote"}
    user = apply_display_defaults(doc)
    assert user["location"] == "Remote"
    assert "isPublic" not in doc


def test_private_and_unset_profiles_hidden_from_non_admin():
    docs = [_profile("pub"), _profile("priv", isPublic=False), {"id": "unset"}]
    assert _ids(filter_profiles(docs, FilterSpec())) == ["pub"]


def test_admin_sees_every_profile():
    docs = [_profile("pub"), _profile("priv", isPublic=False), {"id": "unset"}]
    assert _ids(filter_profiles(docs, FilterSpec(admin=True))) == ["pub", "priv", "unset"]


def test_skills_filter_is_case_insensitive_any_of():
    docs = [
        _profile("a", skills=["Python", "SQL"]),
        _profile("b", skills=["Go"]),
        _profile("c"),
    ]
    assert _ids(filter_profiles(docs, FilterSpec(skills=["python"]))) == ["a"]
    assert _ids(filter_profiles(docs, FilterSpec(skills=["PYTHON", "go"]))) == ["a", "b"]


def test_availability_requires_a_list():
    docs = [_profile("a", availability=["Weekends"]), _profile("b", availability="Weekends")]
    assert _ids(filter_profiles(docs, FilterSpec(availability=["weekends"]))) == ["a"]


def test_role_team_timezone_accept_string_or_list():
    docs = [
        _profile("a", role="Mentor", team="Platform", timezone="PST"),
        _profile("b", role=["mentee", "Mentor"], team=["platform"], timezone=["pst"]),
        _profile("c", role="mentee"),
    ]
    spec = FilterSpec(role=["mentor"], team=["Platform"], timezone=["PST"])
    assert _ids(filter_profiles(docs, spec)) == ["a", "b"]


def test_scalar_filters_on_education_and_industry():
    docs = [
        _profile("a", education="Bachelor's", industry="Fintech"),
        _profile("b", education="Master's", industry="fintech"),
        _profile("c", industry="Fintech"),
    ]
    assert _ids(filter_profiles(docs, FilterSpec(industry=["FINTECH"]))) == ["a", "b", "c"]
    assert _ids(filter_profiles(docs, FilterSpec(education=["bachelor's", "master's"]))) == ["a", "b"]


def test_experience_ranges():
    docs = [
        _profile("zero", years_experience=0),
        _profile("three", years_experience=3),
        _profile("ten", years_experience=10),
        _profile("text", years_experience="10"),
        _profile("missing"),
    ]
    assert _ids(filter_profiles(docs, FilterSpec(experience=["4+"]))) == ["ten"]
    assert _ids(filter_profiles(docs, FilterSpec(experience=["0-1", "2-3"]))) == ["zero", "three"]
    assert _ids(filter_profiles(docs, FilterSpec(experience=["bogus"]))) == []


def test_search_matches_names_industry_and_skills():
    docs = [
        _profile("skill", skills=["Engineering"], jobTitle="Designer"),
        _profile("first", first_name="Bengt"),
        _profile("last", last_name="Strengell"),
        _profile("industry", industry="Energy"),
        _profile("none", first_name="Ava", skills=["Design"]),
    ]
    assert _ids(filter_profiles(docs, FilterSpec(search="eng"))) == ["skill", "first", "last"]
    assert _ids(filter_profiles(docs, FilterSpec(search="ENER"))) == ["industry"]


def test_filters_are_conjunctive():
    docs = [
        _profile("both", skills=["python"], role="mentor"),
        _profile("skills_only", skills=["python"], role="mentee"),
        _profile("role_only", skills=["java"], role="mentor"),
    ]
    spec = FilterSpec(skills=["python"], role=["mentor"])
    assert _ids(filter_profiles(docs, spec)) == ["both"]


def test_from_args_handles_repeated_and_single_values():
    args = MultiDict([("skills", "python"), ("skills", "go"), ("role", "mentor"), ("admin", "true"), ("search", " Eng ")])
    spec = FilterSpec.from_args(args)
    assert spec.skills == ["python", "go"]
    assert spec.role == ["mentor"]
    assert spec.admin is True
    assert spec.search == " Eng "
    assert spec.experience == []


def test_from_args_plain_mapping_and_admin_values():
    assert FilterSpec.from_args({"skills": "python"}).skills == ["python"]
    assert FilterSpec.from_args({"admin": "false"}).admin is False
    assert FilterSpec.from_args({"admin": ""}).admin is False
    assert FilterSpec.from_args({}).search is None


def test_search_term_keeps_surrounding_spaces():
    docs = [_profile("a", skills=["Big Data"]), _profile("b", skills=["Data Science"])]
    spec = FilterSpec.from_args(MultiDict([("search", "data ")]))
    assert _ids(filter_profiles(docs, spec)) == ["b"]
    assert FilterSpec.from_args({"search": ""}).search is None
