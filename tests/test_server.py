import pytest
from werkzeug.test import Client

from blog_backend.background import create_tables
from blog_backend.server import create_app, main


def test_create_app_makes_directory(tmp_path):
    data = tmp_path / "nested" / "data"
    app = create_app(data)
    try:
        assert (data / "blog.db").is_file()
    finally:
        app.db.close()


def test_created_app_serves_clicks(tmp_path):
    (tmp_path / "articles.json").write_text('[{"id":"a"}]')
    app = create_app(tmp_path)
    try:
        create_tables(app.db, tmp_path / "articles.json")
        client = Client(app)
        client.post("/article/click", json={"id": "a"})
        assert client.get("/article/click?id=a").get_json() == {"count": 1}
    finally:
        app.db.close()


def test_main_help_exits():
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0