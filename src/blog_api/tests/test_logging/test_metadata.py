from blog_api.utils.metadata import get_project_name, get_project_version, project_table


def test_project_table_reads_nearest_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\nversion = "1.2.3"\n')
    nested = tmp_path / "src" / "pkg"
    nested.mkdir(parents=True)

    assert project_table(nested) == {"name": "demo", "version": "1.2.3"}


def test_project_table_ignores_broken_file(tmp_path):
    (tmp_path / "pyproject.toml").write_text("[project\nname = ")

    assert project_table(tmp_path) == {}


def test_service_name_and_version():
    assert get_project_name() == "blog-api"
    assert get_project_version() != ""
