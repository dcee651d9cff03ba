import pytest

from fuego.cli import controller_command, create_entity_file, main, service_command


def test_create_controller(tmp_path):
    res = create_entity_file("books", "controller.py", "books_controller.py", tmp_path)
    assert '("GET", "/books/{id}", self.get_books)' in res
    assert "def post_books(self, c: Context) -> Books:" in res
    path = tmp_path / "domains" / "books" / "books_controller.py"
    assert path.read_text(encoding="utf-8") == res


def test_create_entity_file_unknown_template(tmp_path):
    with pytest.raises(FileNotFoundError):
        create_entity_file("books", "nope.py", "books.py", tmp_path)


def test_create_entity_file_overwrites(tmp_path):
    target = tmp_path / "domains" / "books" / "books.py"
    target.parent.mkdir(parents=True)
    target.write_text("old", encoding="utf-8")
    res = create_entity_file("books", "entity.py", "books.py", tmp_path)
    assert target.read_text(encoding="utf-8") == res


def test_controller_command_named(tmp_path, capsys):
    written = controller_command("books", False, tmp_path)
    directory = tmp_path / "domains" / "books"
    assert written == [directory / "books.py", directory / "books_controller.py"]
    assert all(p.is_file() for p in written)
    assert "🔥 Controller books created successfully" in capsys.readouterr().out


def test_controller_command_default_name(tmp_path, capsys):
    written = controller_command("", False, tmp_path)
    assert written[0] == tmp_path / "domains" / "newEntity" / "newEntity.py"
    out = capsys.readouterr().out
    assert "Note: You can add a controller name as an argument." in out


def test_controller_command_with_service(tmp_path):
    written = controller_command("books", True, tmp_path)
    names = sorted(p.name for p in written)
    assert names == ["books.py", "books.py", "books_controller.py", "books_service.py"]
    assert (tmp_path / "domains" / "books" / "books_service.py").is_file()


def test_service_command_default_name(tmp_path, capsys):
    written = service_command("", tmp_path)
    directory = tmp_path / "domains" / "newController"
    assert written == [directory / "newController.py", directory / "newController_service.py"]
    out = capsys.readouterr().out
    assert "Example: `fuego service books`" in out
    assert "🔥 Service newController created successfully" in out


def test_main_without_command(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "The 🔥 CLI!\n"


def test_main_controller(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["controller", "books"]) == 0
    assert (tmp_path / "domains" / "books" / "books_controller.py").is_file()
    assert not (tmp_path / "domains" / "books" / "books_service.py").exists()


def test_main_alias_with_service(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["c", "books", "--with-service"]) == 0
    assert (tmp_path / "domains" / "books" / "books_service.py").is_file()


def test_main_service_alias(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["s", "books"]) == 0
    content = (tmp_path / "domains" / "books" / "books_service.py").read_text(encoding="utf-8")
    assert "class BooksServiceImpl:" in content


def test_main_reports_os_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "domains").write_text("not a directory", encoding="utf-8")
    assert main(["controller", "books"]) == 1
    assert capsys.readouterr().err.startswith("fuego: ")