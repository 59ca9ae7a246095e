import pytest

from studentrecords.models import Postgraduate, StudentKind, Undergraduate
from studentrecords.registry import StudentRegistry, ValidationError, validate_form
from studentrecords.storage import StorageError, load_students


@pytest.fixture
def registry(tmp_path):
    path = tmp_path / "students.dat"
    path.write_text("", encoding="utf-8")
    reg = StudentRegistry(path)
    reg.load()
    reg.add("2023001", "Alice", "女", StudentKind.UNDERGRADUATE, "20", "10")
    reg.add("2023002", "Alicia", "女", StudentKind.POSTGRADUATE, "24", "8")
    reg.add("2023003", "Bob", "男", StudentKind.UNDERGRADUATE, "21", "12")
    return reg


def test_validate_form_trims_and_parses():
    assert validate_form(" 42 ", " Ann ", " 19 ", " 3.5 ") == ("42", "Ann", 19, 3.5)


@pytest.mark.parametrize(
    "student_id, name",
    [("", "Ann"), ("42", ""), ("   ", "Ann"), ("42", "  ")],
)
def test_validate_form_requires_id_and_name(student_id, name):
    with pytest.raises(ValidationError, match="学号和姓名不能为空！"):
        validate_form(student_id, name, "19", "3")


@pytest.mark.parametrize("age_text", ["0", "-3", "abc", "", "1.5", "1_0"])
def test_validate_form_rejects_bad_age(age_text):
    with pytest.raises(ValidationError, match="年龄必须是正整数！"):
        validate_form("42", "Ann", age_text, "3")


@pytest.mark.parametrize("credits_text", ["-1", "x", ""])
def test_validate_form_rejects_bad_credits(credits_text):
    with pytest.raises(ValidationError, match="学分必须是非负数！"):
        validate_form("42", "Ann", "19", credits_text)


def test_validate_form_accepts_zero_credits():
    assert validate_form("42", "Ann", "19", "0")[3] == 0.0


def test_add_persists_to_file(registry):
    stored = load_students(registry.path)
    assert [s.student_id for s in stored] == ["2023001", "2023002", "2023003"]
    assert stored == list(registry)
    assert len(registry) == 3


def test_add_creates_right_kind(registry):
    undergraduate = registry.get("2023001")
    postgraduate = registry.get("2023002")
    assert isinstance(undergraduate, Undergraduate)
    assert isinstance(postgraduate, Postgraduate)
    assert undergraduate.kind() is StudentKind.UNDERGRADUATE
    assert postgraduate.kind() is StudentKind.POSTGRADUATE
    assert undergraduate.credits() == 15.0
    assert postgraduate.credits() == 16.0


def test_add_duplicate_id_rejected(registry):
    with pytest.raises(ValidationError, match="该学号已存在！"):
        registry.add(" 2023001 ", "Carol", "女", StudentKind.UNDERGRADUATE, "20", "1")
    assert len(registry) == 3


def test_add_duplicate_checked_before_numbers(registry):
    with pytest.raises(ValidationError, match="该学号已存在！"):
        registry.add("2023001", "Carol", "女", StudentKind.UNDERGRADUATE, "bad", "1")


def test_add_invalid_input_leaves_roster_unchanged(registry):
    with pytest.raises(ValidationError):
        registry.add("2023009", "Carol", "女", StudentKind.UNDERGRADUATE, "0", "1")
    assert "2023009" not in registry


def test_get_unknown_raises(registry):
    with pytest.raises(KeyError):
        registry.get("nope")


def test_update_same_kind_mutates(registry):
    original = registry.get("2023003")
    updated = registry.update("2023003", "Robert", "男", "本科生", "22", "15")
    assert updated is original
    assert (updated.name, updated.age, updated.raw_credits) == ("Robert", 22, 15.0)
    assert load_students(registry.path) == list(registry)


def test_update_kind_change_replaces_in_place(registry):
    updated = registry.update("2023001", "Alice", "女", StudentKind.POSTGRADUATE, "20", "10")
    assert isinstance(updated, Postgraduate)
    ids = [s.student_id for s in registry]
    assert ids == ["2023001", "2023002", "2023003"]
    assert registry.get("2023001") is updated
    assert load_students(registry.path)[0].kind() is StudentKind.POSTGRADUATE


def test_update_unknown_id_raises(registry):
    with pytest.raises(KeyError):
        registry.update("9999", "X", "男", StudentKind.UNDERGRADUATE, "20", "1")


def test_update_validates(registry):
    with pytest.raises(ValidationError):
        registry.update("2023001", "Alice", "女", StudentKind.UNDERGRADUATE, "20", "-2")
    assert registry.get("2023001").raw_credits == 10.0


def test_delete_removes_and_saves(registry):
    assert registry.delete(["2023001", "2023003", "absent"]) == 2
    assert [s.student_id for s in registry] == ["2023002"]
    assert [s.student_id for s in load_students(registry.path)] == ["2023002"]


def test_delete_nothing_returns_zero(registry):
    assert registry.delete(["absent"]) == 0
    assert len(registry) == 3


def test_search_blank_returns_all(registry):
    assert registry.search("   ") == list(registry)


def test_search_prefers_exact(registry):
    assert [s.name for s in registry.search("Alice")] == ["Alice"]


def test_search_falls_back_to_substring(registry):
    assert [s.name for s in registry.search("ali")] == ["Alice", "Alicia"]


def test_search_by_id_substring(registry):
    assert [s.student_id for s in registry.search("00")] == ["2023001", "2023002", "2023003"]


def test_search_no_match(registry):
    assert registry.search("zzz") == []


def test_load_missing_file_creates_it(tmp_path):
    path = tmp_path / "missing.dat"
    reg = StudentRegistry(path)
    with pytest.raises(StorageError):
        reg.load()
    assert path.exists()
    assert len(reg) == 0


def test_load_replaces_roster(registry):
    registry.path.write_text("7 Zed 男 30 4 研究生\n", encoding="utf-8")
    registry.load()
    assert [s.student_id for s in registry] == ["7"]