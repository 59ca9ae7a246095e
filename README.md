# studentrecords

A small desktop manager for student records. Each record holds a student
number, a name, a gender, an age, a raw credit count and a degree type
(本科生 for undergraduates, 研究生 for postgraduates). Undergraduates earn
1.5 credits per raw credit, postgraduates 2.0.

Records are kept in a plain UTF-8 text file, one student per line, with
fields separated by spaces:

```
2023001 张三 男 20 30 本科生
2023002 李四 女 24 12.5 研究生
```

The credits column holds the raw credits, written in `%g` style. Blank
lines, lines with fewer than six fields and lines with an unknown degree
type are skipped when the file is read.

## Installing

```
pip install .
```

The window uses Tk through the standard library's `tkinter`, so the Python
you install with has to come with Tk.

## The desktop window

```
studentrecords [data_file]
```

This opens the main window on `data_file`, or on `students.dat` in the
current directory if none is given. If the file cannot be read, you get a
warning and an empty file is created in its place. The table shows every
student with their weighted credits and a selection box in the last column;
click that cell to tick it or clear it.

- **添加 (Add)** opens a form for a new student. The student number and
  name are required, the number must not already be in use, the age must be
  a positive whole number and the credits a non-negative number.
- **修改 (Update)** edits the one ticked student. The student number cannot
  be changed. Changing the degree type replaces the record with one of the
  new type.
- **删除 (Delete)** removes every ticked student after a confirmation.
- **查找 (Search)** looks for the keyword in student numbers and names.
  Exact matches are tried first; if there are none, a case-insensitive
  substring search follows. If nothing matches, the whole list is shown
  with a notice. An empty keyword shows the whole list again.

Every change is written back to the data file at once.

## Using it from Python

```python
from studentrecords.registry import StudentRegistry, ValidationError
from studentrecords.models import StudentKind

registry = StudentRegistry("students.dat")
registry.load()

registry.add("2023003", "王五", "男", StudentKind.UNDERGRADUATE, "19", "20")
print(registry.get("2023003").credits())  # 30.0

try:
    registry.add("2023003", "赵六", "女", StudentKind.POSTGRADUATE, "23", "10")
except ValidationError as error:
    print(error)  # the student number is already taken

for student in registry.search("王"):
    print(student.student_id, student.name)

registry.delete(["2023003"])
```

`StudentRegistry.load` raises `StorageError` if the file cannot be read
(after creating an empty one where it can). `add`, `update` and `delete`
save to the file themselves; `update` raises `KeyError` for an unknown
student number, and `delete` returns how many students were removed.
`validate_form` checks form fields on their own.

`studentrecords.models` has `Student`, `Undergraduate`, `Postgraduate`,
`StudentKind` and `make_student`. For lower-level work,
`studentrecords.storage` has `load_students`, `save_students`,
`find_students` and `format_number`, and raises `StorageError` when a file
cannot be opened or written.

## Running the tests

```
pip install .[test]
pytest
```