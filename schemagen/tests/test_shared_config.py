import argparse
from pathlib import Path

import pytest

from schemagen.shared.config import (
    DEFAULT_DSN,
    DEFAULT_FORMATTER,
    GeneratorConfig,
    PoolSettings,
    add_connection_arguments,
    load_config,
    resolve_config,
    split_command,
    split_schemas,
)
from schemagen.shared.errors import ConfigError


def parse(argv):
    parser = argparse.ArgumentParser()
    add_connection_arguments(parser)
    parser.add_argument("-p", "--package", default=None)
    parser.add_argument("-o", "--output", default=None)
    parser.add_argument("--formatter", default=None)
    return parser.parse_args(argv)


class TestLoadConfig:
    def test_load_valid(self, tmp_path):
        config_file = tmp_path / "schemagen.yaml"
        config_file.write_text("dsn: postgres://u@h/db\nschemas: [public]\n", encoding="utf-8")

        data = load_config(config_file)

        assert data == {"dsn": "postgres://u@h/db", "schemas": ["public"]}

    def test_load_empty_file(self, tmp_path):
        config_file = tmp_path / "schemagen.yaml"
        config_file.write_text("", encoding="utf-8")

        assert load_config(config_file) == {}

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Failed to read config file"):
            load_config(tmp_path / "missing.yaml")

    def test_load_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "schemagen.yaml"
        config_file.write_text("dsn: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(config_file)

    def test_load_non_mapping(self, tmp_path):
        config_file = tmp_path / "schemagen.yaml"
        config_file.write_text("- public\n- audit\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(config_file)

    def test_load_unknown_key(self, tmp_path):
        config_file = tmp_path / "schemagen.yaml"
        config_file.write_text("dsn: x\ntarget: rust\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_config(config_file)

        assert "Option 'config': unknown key(s): target" in str(exc_info.value)
        assert exc_info.value.source == str(config_file)


class TestSplitSchemas:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("public", ("public",)),
            ("public,audit", ("public", "audit")),
            (" public , audit ", ("public", "audit")),
            ("public,,audit,", ("public", "audit")),
            ("public,audit,public", ("public", "audit")),
            (["public", "audit"], ("public", "audit")),
            ("", ()),
            ([], ()),
        ],
    )
    def test_split_schemas(self, value, expected):
        assert split_schemas(value) == expected


class TestSplitCommand:
    def test_string(self):
        assert split_command("gofmt -s -w") == ("gofmt", "-s", "-w")

    def test_quoted_string(self):
        assert split_command("'my fmt' -w") == ("my fmt", "-w")

    def test_list(self):
        assert split_command(["goimports", "-w"]) == ("goimports", "-w")


class TestResolveConfig:
    def test_defaults(self):
        config = resolve_config(parse([]))

        assert config == GeneratorConfig()
        assert config.dsn == DEFAULT_DSN
        assert config.schemas == ("public",)
        assert config.package == "model"
        assert config.output == Path("tables.go")
        assert config.formatter == DEFAULT_FORMATTER
        assert config.pool == PoolSettings(size=8, max_overflow=0, recycle=180, timeout=30)

    def test_cli_flags(self):
        config = resolve_config(
            parse(["-d", "postgres://u@h/db", "-s", "public,audit", "-p", "store", "-o", "out/x.go"])
        )

        assert config.dsn == "postgres://u@h/db"
        assert config.schemas == ("public", "audit")
        assert config.package == "store"
        assert config.output == Path("out/x.go")

    def test_file_values(self, tmp_path):
        config_file = tmp_path / "schemagen.yaml"
        config_file.write_text(
            "dsn: postgres://file@h/db\n"
            "schemas: public, billing\n"
            "package: billing\n"
            "formatter: [goimports, -w]\n"
            "pool:\n"
            "  size: 4\n"
            "  timeout: 10\n",
            encoding="utf-8",
        )

        config = resolve_config(parse(["-c", str(config_file)]))

        assert config.dsn == "postgres://file@h/db"
        assert config.schemas == ("public", "billing")
        assert config.package == "billing"
        assert config.formatter == ("goimports", "-w")
        assert config.pool == PoolSettings(size=4, max_overflow=0, recycle=180, timeout=10)

    def test_cli_overrides_file(self, tmp_path):
        config_file = tmp_path / "schemagen.yaml"
        config_file.write_text(
            "dsn: postgres://file@h/db\npackage: billing\npool:\n  size: 4\n",
            encoding="utf-8",
        )

        config = resolve_config(
            parse(["-c", str(config_file), "-d", "postgres://cli@h/db", "--pool-size", "2"])
        )

        assert config.dsn == "postgres://cli@h/db"
        assert config.package == "billing"
        assert config.pool.size == 2

    def test_relative_output_resolved_against_config_dir(self, tmp_path):
        config_dir = tmp_path / "conf"
        config_dir.mkdir()
        config_file = config_dir / "schemagen.yaml"
        config_file.write_text("output: ../gen/tables.go\n", encoding="utf-8")

        config = resolve_config(parse(["-c", str(config_file)]))

        assert config.output == config_dir.resolve() / "../gen/tables.go"

    def test_cli_output_stays_relative(self, tmp_path):
        config_file = tmp_path / "schemagen.yaml"
        config_file.write_text("output: gen/tables.go\n", encoding="utf-8")

        config = resolve_config(parse(["-c", str(config_file), "-o", "local.go"]))

        assert config.output == Path("local.go")

    def test_formatter_flag(self):
        config = resolve_config(parse(["--formatter", "gofmt -s -w"]))

        assert config.formatter == ("gofmt", "-s", "-w")

    @pytest.mark.parametrize("package", ["1model", "my-model", "", "model.go"])
    def test_invalid_package(self, package):
        with pytest.raises(ConfigError, match="Option 'package'"):
            resolve_config(parse(["-p", package]))

    @pytest.mark.parametrize("schemas", ["", " , "])
    def test_empty_schemas(self, schemas):
        with pytest.raises(ConfigError, match="at least one schema"):
            resolve_config(parse(["-s", schemas]))

    def test_empty_dsn(self):
        with pytest.raises(ConfigError, match="Option 'dsn'"):
            resolve_config(parse(["-d", "  "]))

    def test_empty_formatter(self):
        with pytest.raises(ConfigError, match="Option 'formatter'"):
            resolve_config(parse(["--formatter", ""]))

    def test_invalid_schemas_type(self, tmp_path):
        config_file = tmp_path / "schemagen.yaml"
        config_file.write_text("schemas: 5\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            resolve_config(parse(["-c", str(config_file)]))

        assert "Option 'schemas'" in str(exc_info.value)
        assert str(config_file) in str(exc_info.value)

    @pytest.mark.parametrize(
        "pool_yaml,option",
        [
            ("pool: 3\n", "pool"),
            ("pool:\n  size: 0\n", "pool.size"),
            ("pool:\n  recycle: -1\n", "pool.recycle"),
            ("pool:\n  timeout: soon\n", "pool.timeout"),
            ("pool:\n  size: true\n", "pool.size"),
            ("pool:\n  idle: 5\n", "pool"),
        ],
    )
    def test_invalid_pool(self, tmp_path, pool_yaml, option):
        config_file = tmp_path / "schemagen.yaml"
        config_file.write_text(pool_yaml, encoding="utf-8")

        with pytest.raises(ConfigError, match=f"Option '{option}'"):
            resolve_config(parse(["-c", str(config_file)]))

    def test_max_overflow_may_be_zero(self, tmp_path):
        config_file = tmp_path / "schemagen.yaml"
        config_file.write_text("pool:\n  max_overflow: 0\n", encoding="utf-8")

        assert resolve_config(parse(["-c", str(config_file)])).pool.max_overflow == 0

    def test_pool_size_flag_validated(self):
        with pytest.raises(ConfigError, match="Option 'pool.size'"):
            resolve_config(parse(["--pool-size", "0"]))
