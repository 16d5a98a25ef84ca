"""Tests for the non-Python manifest parsers."""

import pytest

from depscout.errors import ManifestParseError
from depscout.models import Dependency
from depscout.parse_dotnet import parse_nuget
from depscout.parse_go import parse_go_mod
from depscout.parse_java import parse_pom
from depscout.parse_node import parse_package_json
from depscout.parse_php import parse_composer_json
from depscout.parse_ruby import parse_gemfile
from depscout.parse_rust import parse_cargo_toml


def pairs(deps):
    return [(d.name, d.version) for d in deps]


class TestNpmParser:
    def test_single_dependency(self):
        deps = parse_package_json('{"dependencies":{"lodash":"^4.17.21"}}')
        assert deps == [Dependency(name="lodash", version="4.17.21")]

    def test_dependencies_then_dev_dependencies(self, sample_package_json):
        assert pairs(parse_package_json(sample_package_json)) == [
            ("express", "4.18.0"),
            ("lodash", "4.17.21"),
            ("jest", "29.0.0"),
        ]

    def test_duplicates_across_sections_kept(self):
        content = '{"dependencies": {"a": "1.0.0"}, "devDependencies": {"a": "2.0.0"}}'
        assert pairs(parse_package_json(content)) == [("a", "1.0.0"), ("a", "2.0.0")]

    def test_alternatives_dropped(self):
        deps = parse_package_json('{"dependencies": {"react": "^17.0.0 || ^18.0.0"}}')
        assert deps[0].version == "17.0.0"

    def test_no_dependency_sections(self):
        assert parse_package_json('{"name": "empty"}') == []

    def test_invalid_json(self):
        with pytest.raises(ManifestParseError) as exc_info:
            parse_package_json("{not json")
        assert exc_info.value.ecosystem == "npm"
        assert exc_info.value.cause is not None

    def test_non_object_json(self):
        with pytest.raises(ManifestParseError):
            parse_package_json("[1, 2, 3]")

    @pytest.mark.parametrize("version", ["null", "1", '{"version": "1.0"}'])
    def test_non_string_version(self, version):
        with pytest.raises(ManifestParseError) as exc_info:
            parse_package_json(f'{{"dependencies": {{"a": {version}}}}}')
        assert exc_info.value.ecosystem == "npm"
        assert isinstance(exc_info.value.cause, TypeError)


class TestComposerParser:
    def test_php_excluded(self):
        deps = parse_composer_json('{"require":{"php":">=7.4","monolog/monolog":"^2.0"}}')
        assert deps == [Dependency(name="monolog/monolog", version="2.0")]

    def test_require_dev_and_extensions(self):
        content = """{
            "require": {"php": "^8.1", "ext-json": "*", "guzzlehttp/guzzle": "~7.5"},
            "require-dev": {"phpunit/phpunit": "^10.0"}
        }"""
        assert pairs(parse_composer_json(content)) == [
            ("ext-json", "*"),
            ("guzzlehttp/guzzle", "7.5"),
            ("phpunit/phpunit", "10.0"),
        ]

    def test_invalid_json(self):
        with pytest.raises(ManifestParseError) as exc_info:
            parse_composer_json('{"require": ')
        assert exc_info.value.ecosystem == "composer"

    def test_non_string_version(self):
        with pytest.raises(ManifestParseError) as exc_info:
            parse_composer_json('{"require-dev": {"phpunit/phpunit": null}}')
        assert exc_info.value.ecosystem == "composer"
        assert isinstance(exc_info.value.cause, TypeError)


class TestMavenParser:
    def test_dependencies(self, sample_pom):
        assert pairs(parse_pom(sample_pom)) == [
            ("org.springframework:spring-core", "5.3.20"),
            ("junit:junit", "[4.13,)"),
        ]

    def test_single_line_block(self):
        content = (
            "<dependency><groupId> com.google.guava </groupId>"
            "<artifactId>guava</artifactId><version>31.1-jre</version></dependency>"
        )
        assert pairs(parse_pom(content)) == [("com.google.guava:guava", "31.1-jre")]

    def test_no_dependencies(self):
        assert parse_pom("<project></project>") == []


class TestNugetParser:
    def test_packages_config(self):
        content = """<?xml version="1.0" encoding="utf-8"?>
<packages>
  <package id="Newtonsoft.Json" version="13.0.1" targetFramework="net48" />
  <package id="NUnit" version="3.13.3" targetFramework="net48" />
</packages>"""
        assert pairs(parse_nuget(content)) == [("Newtonsoft.Json", "13.0.1"), ("NUnit", "3.13.3")]

    def test_package_reference(self):
        content = """<Project Sdk="Microsoft.NET.Sdk">
  <ItemGroup>
    <PackageReference Include="Serilog" Version="2.12.0" />
    <PackageReference Include="Dapper" Version="[2.0.123]" />
  </ItemGroup>
</Project>"""
        assert pairs(parse_nuget(content)) == [("Serilog", "2.12.0"), ("Dapper", "[2.0.123]")]

    def test_both_formats_concatenated(self):
        content = (
            '<PackageReference Include="Serilog" Version="2.12.0" />\n'
            '<package id="NUnit" version="3.13.3" />'
        )
        assert pairs(parse_nuget(content)) == [("NUnit", "3.13.3"), ("Serilog", "2.12.0")]


class TestRubygemsParser:
    def test_gemfile(self):
        content = """source "https://rubygems.org"

# Web
gem 'rails', '~> 7.0.4'
gem "pg", ">= 0.18"
gem 'puma'
  # gem 'commented', '1.0'
"""
        assert pairs(parse_gemfile(content)) == [
            ("rails", "7.0.4"),
            ("pg", "0.18"),
            ("puma", "latest"),
        ]


class TestGoParser:
    def test_require_block_and_single_line(self):
        content = """module github.com/acme/tool

go 1.21

require github.com/pkg/errors v0.9.1

require (
\tgithub.com/spf13/cobra v1.7.0
\t// tooling
\tgolang.org/x/sys v0.12.0 // indirect
)
"""
        assert pairs(parse_go_mod(content)) == [
            ("github.com/pkg/errors", "v0.9.1"),
            ("github.com/spf13/cobra", "v1.7.0"),
            ("golang.org/x/sys", "v0.12.0"),
        ]

    def test_lines_outside_require_ignored(self):
        content = "module x\n\nreplace a => b v1.0.0\nexclude c v2.0.0\n"
        assert parse_go_mod(content) == []


class TestCargoParser:
    def test_dependency_sections(self):
        content = """[package]
name = "demo"
version = "0.1.0"

[dependencies]
serde = "1.0"
tokio = { version = "1", features = ["full"] }
regex = "^1.9"

[dev-dependencies]
# test helpers
criterion = "0.5"

[build-dependencies]
cc = "1.0"
"""
        assert pairs(parse_cargo_toml(content)) == [
            ("serde", "1.0"),
            ("regex", "1.9"),
            ("criterion", "0.5"),
        ]

    def test_no_dependency_section(self):
        assert parse_cargo_toml('[package]\nname = "demo"\n') == []
