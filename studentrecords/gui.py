"""Tk windows for browsing, searching and editing the student roster."""

from __future__ import annotations

import argparse
import tkinter as tk
from collections.abc import Iterable, Sequence
from tkinter import messagebox, ttk

from .models import Student, StudentKind
from .registry import StudentRegistry, ValidationError, validate_form
from .storage import DEFAULT_PATH, StorageError, format_number

HEADERS = ("学号", "姓名", "性别", "年龄", "学分", "学历", "是否选择")
GENDERS = ("男", "女")
KINDS = tuple(kind.value for kind in StudentKind)

_UNCHECKED = "☐"
_CHECKED = "☑"
_COLUMNS = tuple(f"c{index}" for index in range(len(HEADERS)))
_CHECK_COLUMN = f"#{len(HEADERS)}"


def table_row(student: Student) -> tuple[str, str, str, str, str, str]:
    """Return the text shown in the table for one student.

    The credits column shows the weighted credits, not the raw ones.
    """
    return (
        student.student_id,
        student.name,
        student.gender,
        str(student.age),
        format_number(student.credits()),
        student.kind().value,
    )


class ConfirmDialog(tk.Toplevel):
    """A modal yes/no dialog; ``run`` reports whether the user confirmed."""

    def __init__(self, parent: tk.Misc, message: str) -> None:
        super().__init__(parent)
        self.title("确认")
        self.attributes("-topmost", True)
        self.transient(parent.winfo_toplevel())
        self.confirmed = False

        ttk.Label(self, text=message, padding=12).pack()
        buttons = ttk.Frame(self, padding=8)
        buttons.pack()
        ttk.Button(buttons, text="确定", command=self._accept).pack(side=tk.LEFT, padx=4)
        ttk.Button(buttons, text="取消", command=self._reject).pack(side=tk.LEFT, padx=4)
        self.protocol("WM_DELETE_WINDOW", self._reject)

    def _accept(self) -> None:
        self.confirmed = True
        self.destroy()

    def _reject(self) -> None:
        self.confirmed = False
        self.destroy()

    def run(self) -> bool:
        """Show the dialog, wait until it closes and return the user's choice."""
        self.wait_visibility()
        self.grab_set()
        self.wait_window()
        return self.confirmed


class StudentForm(tk.Toplevel):
    """Form for adding a student, or editing one when ``student`` is given."""

    def __init__(self, window: MainWindow, student: Student | None = None) -> None:
        super().__init__(window)
        self.window = window
        self.editing = student is not None
        self.title("修改学生信息" if self.editing else "添加学生")
        self.attributes("-topmost", True)

        self.id_var = tk.StringVar()
        self.name_var = tk.StringVar()
        self.gender_var = tk.StringVar(value=GENDERS[0])
        self.kind_var = tk.StringVar(value=KINDS[0])
        self.age_var = tk.StringVar()
        self.credits_var = tk.StringVar()

        body = ttk.Frame(self, padding=12)
        body.pack(fill=tk.BOTH, expand=True)
        id_entry = ttk.Entry(body, textvariable=self.id_var)
        widgets = (
            ("学号", id_entry),
            ("姓名", ttk.Entry(body, textvariable=self.name_var)),
            ("性别", ttk.Combobox(body, textvariable=self.gender_var,
                                 values=GENDERS, state="readonly")),
            ("学历", ttk.Combobox(body, textvariable=self.kind_var,
                                 values=KINDS, state="readonly")),
            ("年龄", ttk.Entry(body, textvariable=self.age_var)),
            ("学分", ttk.Entry(body, textvariable=self.credits_var)),
        )
        for row, (label, widget) in enumerate(widgets):
            ttk.Label(body, text=label).grid(row=row, column=0, sticky=tk.W, pady=2)
            widget.grid(row=row, column=1, sticky=tk.EW, pady=2)
        body.columnconfigure(1, weight=1)

        buttons = ttk.Frame(body)
        buttons.grid(row=len(widgets), column=0, columnspan=2, pady=(8, 0))
        ttk.Button(buttons, text="确定", command=self._submit).pack(side=tk.LEFT, padx=4)
        ttk.Button(buttons, text="取消", command=self.destroy).pack(side=tk.LEFT, padx=4)

        if student is not None:
            self.id_var.set(student.student_id)
            id_entry.state(["disabled"])
            self.name_var.set(student.name)
            self.gender_var.set(GENDERS[0] if student.gender == GENDERS[0] else GENDERS[1])
            self.kind_var.set(student.kind().value)
            self.age_var.set(str(student.age))
            self.credits_var.set(format_number(student.raw_credits))

    def _error(self, title: str, message: str, critical: bool = False) -> None:
        show = messagebox.showerror if critical else messagebox.showwarning
        show(title, message, parent=self)

    def _submit(self) -> None:
        registry = self.window.registry
        student_id = self.id_var.get()
        name = self.name_var.get()
        try:
            trimmed_id = student_id.strip()
            if not self.editing and trimmed_id and name.strip() and trimmed_id in registry:
                raise ValidationError("该学号已存在！")
            _, trimmed_name, _, _ = validate_form(
                student_id, name, self.age_var.get(), self.credits_var.get()
            )
        except ValidationError as exc:
            self._error("错误", str(exc))
            return

        if self.editing:
            message = f"确认要修改学生 {trimmed_name} 的信息吗？"
        else:
            message = f"确认要添加学生 {trimmed_name} 吗？"
        if not ConfirmDialog(self, message).run():
            return

        action = registry.update if self.editing else registry.add
        try:
            action(
                student_id,
                name,
                self.gender_var.get(),
                self.kind_var.get(),
                self.age_var.get(),
                self.credits_var.get(),
            )
        except ValidationError as exc:
            self._error("错误", str(exc))
            return
        except StorageError as exc:
            self._error("错误", str(exc), critical=True)
            return
        self.window.show_list(list(registry))
        self.destroy()


class MainWindow(ttk.Frame):
    """The main window: a table of students with add, edit, delete and search."""

    def __init__(self, master: tk.Misc, registry: StudentRegistry) -> None:
        super().__init__(master, padding=8)
        self.registry = registry
        self._checked: set[str] = set()
        self._row_ids: dict[str, str] = {}
        self.winfo_toplevel().title("学生信息管理系统")

        toolbar = ttk.Frame(self)
        toolbar.pack(fill=tk.X, pady=(0, 6))
        self.keyword_var = tk.StringVar()
        ttk.Label(toolbar, text="请输入姓名或学号查找").pack(side=tk.LEFT)
        ttk.Entry(toolbar, textvariable=self.keyword_var).pack(
            side=tk.LEFT, fill=tk.X, expand=True, padx=4
        )
        for text, command in (
            ("查找", self._on_search),
            ("添加", self._on_add),
            ("修改", self._on_update),
            ("删除", self._on_delete),
        ):
            ttk.Button(toolbar, text=text, command=command).pack(side=tk.LEFT, padx=2)

        self.tree = ttk.Treeview(self, columns=_COLUMNS, show="headings", selectmode="browse")
        for column, header in zip(_COLUMNS, HEADERS):
            self.tree.heading(column, text=header)
            self.tree.column(column, anchor=tk.CENTER, stretch=True, width=90)
        self.tree.pack(fill=tk.BOTH, expand=True)
        self.tree.bind("<ButtonRelease-1>", self._on_click)

        try:
            registry.load()
        except StorageError as exc:
            messagebox.showwarning("错误", str(exc), parent=self)
        self.show_list(list(registry))

    def show_list(self, students: Iterable[Student]) -> None:
        """Replace the table contents with ``students``, all unchecked."""
        self.tree.delete(*self.tree.get_children())
        self._checked.clear()
        self._row_ids.clear()
        for index, student in enumerate(students):
            iid = str(index)
            self._row_ids[iid] = student.student_id
            self.tree.insert("", tk.END, iid=iid, values=(*table_row(student), _UNCHECKED))

    def _on_click(self, event: tk.Event) -> None:
        if self.tree.identify_column(event.x) != _CHECK_COLUMN:
            return
        iid = self.tree.identify_row(event.y)
        if not iid:
            return
        if iid in self._checked:
            self._checked.discard(iid)
            mark = _UNCHECKED
        else:
            self._checked.add(iid)
            mark = _CHECKED
        self.tree.set(iid, _COLUMNS[-1], mark)

    def _checked_ids(self) -> list[str]:
        return [
            self._row_ids[iid] for iid in self.tree.get_children() if iid in self._checked
        ]

    def _on_add(self) -> None:
        StudentForm(self)

    def _on_search(self) -> None:
        keyword = self.keyword_var.get().strip()
        if not keyword:
            self.show_list(list(self.registry))
            return
        results = self.registry.search(keyword)
        if results:
            self.show_list(results)
        else:
            self.show_list(list(self.registry))
            messagebox.showinfo("提示", "未找到匹配的学生信息", parent=self)
        self.winfo_toplevel().lift()
        self.focus_set()

    def _on_update(self) -> None:
        selected: Sequence[str] = self._checked_ids()
        if not selected:
            messagebox.showwarning("警告", "请先选择要修改的学生！", parent=self)
            return
        if len(selected) > 1:
            messagebox.showwarning("警告", "一次只能修改一个学生！", parent=self)
            return
        try:
            student = self.registry.get(selected[0])
        except KeyError:
            return
        StudentForm(self, student)

    def _on_delete(self) -> None:
        selected = self._checked_ids()
        if not selected:
            messagebox.showwarning("警告", "请先选择要删除的学生！", parent=self)
            return
        message = f"确认要删除选中的 {len(selected)} 个学生吗？此操作不可撤销！"
        if not ConfirmDialog(self, message).run():
            return
        try:
            removed = self.registry.delete(selected)
        except StorageError as exc:
            messagebox.showerror("错误", str(exc), parent=self)
            return
        if removed:
            self.show_list(list(self.registry))
            messagebox.showinfo("提示", "删除成功！", parent=self)


def main(argv: Sequence[str] | None = None) -> int:
    """Open the main window on the given data file and run until it closes."""
    parser = argparse.ArgumentParser(description="Manage student records.")
    parser.add_argument("data_file", nargs="?", default=DEFAULT_PATH,
                        help="student data file (default: %(default)s)")
    args = parser.parse_args(argv)

    root = tk.Tk()
    window = MainWindow(root, StudentRegistry(args.data_file))
    window.pack(fill=tk.BOTH, expand=True)
    root.mainloop()
    return 0