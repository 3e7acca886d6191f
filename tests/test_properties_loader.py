"""Tests for property file loading and validation."""

import os
import pytest
import tempfile
from pathlib import Path
from unittest.mock import patch

from propkit.loader import PropertiesLoader
from propkit.exceptions import CyclicReferenceError, PropertiesValidationError


class TestPropertiesLoader:
    """Test loading YAML and .properties files."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.workspace = Path(self.temp_dir)
        self.loader = PropertiesLoader()

    def write(self, name: str, content: str) -> Path:
        """Helper to write a property file."""
        path = self.workspace / name
        path.write_text(content, encoding='utf-8')
        return path

    def test_yaml_scalars_stay_literal(self):
        path = self.write("app.yaml", """
name: demo
enabled: on
verbose: yes
flag: true
port: 0800
ratio: 1e3
empty:
nothing: ~
""")
        properties = self.loader.load(path)

        assert properties == {
            "name": "demo",
            "enabled": "on",
            "verbose": "yes",
            "flag": "true",
            "port": "0800",
            "ratio": "1e3",
            "empty": "",
            "nothing": "~",
        }

    def test_yaml_placeholders_kept_unexpanded(self):
        path = self.write("app.yml", 'home: "/opt/${name}"\n')
        assert self.loader.load(path) == {"home": "/opt/${name}"}

    def test_empty_yaml(self):
        path = self.write("empty.yaml", "")
        assert self.loader.load(path) == {}

    def test_yaml_must_be_mapping(self):
        path = self.write("list.yaml", "- a\n- b\n")
        with pytest.raises(PropertiesValidationError) as exc_info:
            self.loader.load(path)

        assert exc_info.value.exit_code == 2
        assert any("mapping" in err.message for err in exc_info.value.errors)

    def test_nested_values_rejected_all_reported(self):
        path = self.write("nested.yaml", """
ok: fine
db:
  host: localhost
hosts:
  - a
  - b
""")
        with pytest.raises(PropertiesValidationError) as exc_info:
            self.loader.load(path)

        paths = [err.path for err in exc_info.value.errors]
        assert paths == ["db", "hosts"]
        assert "db" in str(exc_info.value)

    def test_invalid_yaml_syntax(self):
        path = self.write("bad.yaml", "key: [unclosed\n")
        with pytest.raises(PropertiesValidationError) as exc_info:
            self.loader.load(path)
        assert "Failed to parse YAML" in exc_info.value.errors[0].message

    def test_properties_file(self):
        path = self.write("app.properties", """
# comment
! also a comment
name=demo
home: /opt/${name}
url = http://host:8080/path
empty=
""")
        properties = self.loader.load(path)

        assert properties == {
            "name": "demo",
            "home": "/opt/${name}",
            "url": "http://host:8080/path",
            "empty": "",
        }

    def test_properties_file_errors_collected(self):
        path = self.write("bad.properties", "good=1\n=value\nbad=\\u12G4\n")
        with pytest.raises(PropertiesValidationError) as exc_info:
            self.loader.load(path)

        errors = exc_info.value.errors
        assert [err.path for err in errors] == ["line 2", "line 3"]
        assert "\\uXXXX" in errors[1].message

    def test_properties_whitespace_separator(self):
        path = self.write("app.properties", "name demo\nkey \t value\nflag\n")
        assert self.loader.load(path) == {"name": "demo", "key": "value", "flag": ""}

    def test_properties_trailing_whitespace_kept(self):
        path = self.write("app.properties", "padded=x  \n")
        assert self.loader.load(path) == {"padded": "x  "}

    def test_properties_line_continuation(self):
        path = self.write("app.properties", "\n".join([
            "fruits=apple, \\",
            "        banana, \\",
            "        pear",
            "path=c:\\\\dir\\\\",
            "next=1",
        ]) + "\n")

        assert self.loader.load(path) == {
            "fruits": "apple, banana, pear",
            "path": "c:\\dir\\",
            "next": "1",
        }

    def test_properties_continuation_error_reports_first_line(self):
        path = self.write("bad.properties", "ok=1\n\\\n  =x\n")
        with pytest.raises(PropertiesValidationError) as exc_info:
            self.loader.load(path)
        assert [err.path for err in exc_info.value.errors] == ["line 2"]

    def test_properties_escapes(self):
        path = self.write("app.properties", "\n".join([
            "a\\=b=c",
            "x\\:y:z",
            "with\\ space=1",
            "tab=a\\tb",
            "snow=\\u2603",
            "plain=\\q",
            "  # indented comment",
        ]) + "\n")

        assert self.loader.load(path) == {
            "a=b": "c",
            "x:y": "z",
            "with space": "1",
            "tab": "a\tb",
            "snow": "\u2603",
            "plain": "q",
        }

    def test_unsupported_suffix(self):
        path = self.write("app.json", "{}")
        with pytest.raises(PropertiesValidationError) as exc_info:
            self.loader.load(path)
        assert "Unsupported property file type" in exc_info.value.errors[0].message

    def test_missing_file(self):
        with pytest.raises(PropertiesValidationError) as exc_info:
            self.loader.load(self.workspace / "missing.yaml")
        assert "Failed to read properties" in exc_info.value.errors[0].message

    def test_errors_reset_between_loads(self):
        bad = self.write("bad.yaml", "- a\n")
        good = self.write("good.yaml", "a: b\n")
        with pytest.raises(PropertiesValidationError):
            self.loader.load(bad)
        assert self.loader.load(good) == {"a": "b"}


class TestLoadResolved:
    """Test loading and expanding in one step."""

    def test_load_resolved(self, tmp_path):
        path = tmp_path / "app.properties"
        path.write_text("base=/opt\nlib=${base}/lib\nuser=${PROPKIT_USER}\n")

        with patch.dict(os.environ, {"PROPKIT_USER": "svc"}):
            resolved = PropertiesLoader().load_resolved(path)

        assert resolved == {"base": "/opt", "lib": "/opt/lib", "user": "svc"}

    def test_load_resolved_without_environment(self, tmp_path):
        path = tmp_path / "app.properties"
        path.write_text("user=${PROPKIT_USER}\n")

        with patch.dict(os.environ, {"PROPKIT_USER": "svc"}):
            resolved = PropertiesLoader().load_resolved(path, use_environment=False)

        assert resolved == {"user": ""}

    def test_load_resolved_cycle(self, tmp_path):
        path = tmp_path / "app.yaml"
        path.write_text("a: ${b}\nb: ${a}\n")
        with pytest.raises(CyclicReferenceError):
            PropertiesLoader().load_resolved(path)
