"""End-to-end tests for NOTICE generation with a mocked HTTP session."""

import json
from unittest.mock import Mock

import pytest
import requests
from conftest import make_response, route

from notice_generator._resolution import ResolverRegistry
from notice_generator.config import NoticeConfig
from notice_generator.exceptions import ManifestError
from notice_generator.generator import NoticeGenerator
from notice_generator.notice import NoticeCache

HEADER = "Example Product\n\nCopyright 2024 Example Corp.\n\nNOTICES:\n--------\n\nThird-party software.\n\n--------\n\n"

LEFT_PAD_DOCUMENT = {
    "name": "left-pad",
    "description": "String left pad",
    "author": {"name": "azer"},
    "license": "WTFPL",
    "repository": {"type": "git", "url": "git+https://github.com/stevemao/left-pad.git"},
    "homepage": "https://github.com/stevemao/left-pad#readme",
}

LEFT_PAD_FRAGMENT = (
    "## left-pad\n\n"
    "This product contains 'left-pad' by azer.\n\n"
    "String left pad\n\n"
    "* HOMEPAGE:\n  * https://github.com/stevemao/left-pad#readme\n\n"
    "* LICENSE: WTFPL\n\n"
    "WTFPL text\n\n"
)

NPM_RESPONSES = {
    "https://registry.npmjs.org/left-pad": make_response(json_data=LEFT_PAD_DOCUMENT),
    "https://raw.githubusercontent.com/stevemao/left-pad/HEAD/LICENSE": make_response(text="WTFPL text"),
}


def offline_session():
    session = Mock(spec=requests.Session)
    session.get.side_effect = AssertionError("no network access expected")
    return session


class BrokenResolver:
    name = "broken"
    priority = 10

    def supports(self, dependency):
        return True

    def resolve(self, dependency, session):
        raise KeyError("name")


@pytest.fixture
def npm_repository(tmp_path):
    (tmp_path / "package.json").write_text(json.dumps({"dependencies": {"left-pad": "^1.3.0"}}))
    return tmp_path


@pytest.fixture
def config(npm_repository):
    return NoticeConfig(
        path=npm_repository,
        title="Example Product",
        copyright="Copyright 2024 Example Corp.",
        description="Third-party software.",
        search=["package.json"],
        max_workers=2,
    )


class TestNoticeGeneratorNpm:
    def test_generates_notice(self, config, mock_session):
        mock_session.get.side_effect = route(NPM_RESPONSES)

        result = NoticeGenerator(config, session=mock_session).run()

        assert config.notice_file_path.read_text() == HEADER + LEFT_PAD_FRAGMENT
        assert result.output_path == config.notice_file_path
        assert result.generated == ["left-pad"]
        assert result.reused == []
        assert result.failed == []
        assert [d.name for d in result.dependencies] == ["left-pad"]

    def test_second_run_reuses_fragments_without_network(self, config, mock_session):
        mock_session.get.side_effect = route(NPM_RESPONSES)
        NoticeGenerator(config, session=mock_session).run()
        first = config.notice_file_path.read_text()

        session = offline_session()
        result = NoticeGenerator(config, session=session).run()

        session.get.assert_not_called()
        assert result.reused == ["left-pad"]
        assert result.generated == []
        assert config.notice_file_path.read_text() == first

    def test_manual_edits_are_kept(self, config):
        edited = "## left-pad\n\nHand-written attribution for left-pad.\n\n"
        config.notice_file_path.write_text(HEADER + edited)

        NoticeGenerator(config, session=offline_session()).run()

        assert config.notice_file_path.read_text() == HEADER + edited

    def test_removed_dependencies_are_dropped(self, config, mock_session):
        config.notice_file_path.write_text(HEADER + "## left-pad\n\ncached\n\n---\n\n## old-dependency\n\ngone\n\n")

        result = NoticeGenerator(config, session=offline_session()).run()

        text = config.notice_file_path.read_text()
        assert "old-dependency" not in text
        assert text == HEADER + "## left-pad\n\ncached\n\n"
        assert result.total == 1

    def test_resolution_failure_still_writes_fragment(self, config, mock_session):
        mock_session.get.side_effect = route({"https://registry.npmjs.org/left-pad": make_response(500)})

        result = NoticeGenerator(config, session=mock_session).run()

        assert result.failed == ["left-pad"]
        assert config.notice_file_path.read_text() == HEADER + "## left-pad\n\nThis product contains 'left-pad'.\n\n\n\n"

    def test_failed_dependency_does_not_affect_others(self, config, mock_session):
        config.additional_dependencies = ["missing-package"]
        mock_session.get.side_effect = route(NPM_RESPONSES)

        result = NoticeGenerator(config, session=mock_session).run()

        assert result.generated == ["left-pad"]
        assert result.failed == ["missing-package"]
        text = config.notice_file_path.read_text()
        assert text == HEADER + LEFT_PAD_FRAGMENT + "---\n\n## missing-package\n\nThis product contains 'missing-package'.\n\n\n\n"

    def test_non_utf8_notice_is_still_split(self, config, caplog):
        config.notice_file_path.write_bytes("Copyright \xa9 2024 ACME\n\n## left-pad\n\ncached\n".encode("latin-1"))

        with caplog.at_level("ERROR", logger="notice_generator"):
            result = NoticeGenerator(config, session=offline_session()).run()

        assert result.reused == ["left-pad"]
        assert config.notice_file_path.read_text() == HEADER + "## left-pad\n\ncached\n\n"
        assert "Cannot split" not in caplog.text

    def test_split_failure_regenerates_fragments(self, config, mock_session, monkeypatch, caplog):
        config.notice_file_path.write_text(HEADER + "## left-pad\n\ncached\n\n")
        monkeypatch.setattr(NoticeCache, "split", Mock(side_effect=OSError("disk error")))
        mock_session.get.side_effect = route(NPM_RESPONSES)

        with caplog.at_level("ERROR", logger="notice_generator"):
            result = NoticeGenerator(config, session=mock_session).run()

        assert "Cannot split existing notice" in caplog.text
        assert result.generated == ["left-pad"]
        assert config.notice_file_path.read_text() == HEADER + LEFT_PAD_FRAGMENT

    def test_unexpected_resolver_error_still_writes_fragment(self, config, mock_session):
        registry = ResolverRegistry()
        registry.register(BrokenResolver())

        result = NoticeGenerator(config, registry=registry, session=mock_session).run()

        assert result.failed == ["left-pad"]
        assert config.notice_file_path.read_text() == HEADER + "## left-pad\n\nThis product contains 'left-pad'.\n\n\n\n"

    def test_fragment_write_error_falls_back_to_known_fields(self, config, mock_session):
        mock_session.get.side_effect = route(NPM_RESPONSES)
        generator = NoticeGenerator(config, session=mock_session)
        write_fragment = generator.cache.write_fragment
        calls = []

        def flaky_write(dependency, license_text=""):
            calls.append(dependency.name)
            if len(calls) == 1:
                raise OSError("disk full")
            return write_fragment(dependency, license_text)

        generator.cache.write_fragment = flaky_write
        result = generator.run()

        assert calls == ["left-pad", "left-pad"]
        assert result.failed == ["left-pad"]
        assert config.notice_file_path.read_text() == HEADER + "## left-pad\n\nThis product contains 'left-pad'.\n\n\n\n"

    def test_manifest_error_propagates(self, config, mock_session):
        config.search = ["missing/package.json"]

        with pytest.raises(ManifestError):
            NoticeGenerator(config, session=mock_session).run()

    def test_provided_session_is_not_closed(self, config, mock_session):
        mock_session.get.side_effect = route(NPM_RESPONSES)

        with NoticeGenerator(config, session=mock_session) as generator:
            generator.run()

        mock_session.close.assert_not_called()


class TestNoticeGeneratorGo:
    def test_go_module_flow(self, tmp_path, mock_session):
        (tmp_path / "go.mod").write_text(
            "module github.com/example/service\n\n"
            "require (\n"
            "\tgithub.com/stretchr/testify v1.8.4\n"
            "\tgolang.org/x/sys v0.15.0 // indirect\n"
            ")\n"
        )
        config = NoticeConfig(path=tmp_path, title="T", copyright="C", description="D", search=["go.mod"])
        mock_session.get.side_effect = route(
            {
                "https://github.com/stretchr/testify?go-get=1": make_response(
                    text='<meta name="go-import" content="github.com/stretchr/testify git https://github.com/stretchr/testify">'
                ),
                "https://api.github.com/repos/stretchr/testify": make_response(
                    json_data={
                        "description": "A toolkit with common assertions and mocks",
                        "html_url": "https://github.com/stretchr/testify",
                        "owner": {"login": "stretchr"},
                        "license": {"name": "MIT License"},
                    }
                ),
                "https://raw.githubusercontent.com/stretchr/testify/HEAD/LICENSE": make_response(text="MIT text"),
            }
        )

        result = NoticeGenerator(config, session=mock_session).run()

        assert [d.name for d in result.dependencies] == ["Go", "stretchr/testify"]
        # api.github.com/repos/golang/go answers 404, the built-in fields are kept
        assert result.failed == ["Go"]
        text = config.notice_file_path.read_text()
        assert "## Go\n\nThis product contains 'Go' by The Go authors.\n\n" in text
        assert (
            "## stretchr/testify\n\n"
            "This product contains 'stretchr/testify' by stretchr.\n\n"
            "A toolkit with common assertions and mocks\n\n"
            "* HOMEPAGE:\n  * https://github.com/stretchr/testify\n\n"
            "* LICENSE: MIT License\n\n"
            "MIT text\n\n"
        ) in text
        assert "x/sys" not in text
        assert text.index("## Go") < text.index("## stretchr/testify")

    def test_ignore_applies_to_resolved_names(self, tmp_path, mock_session):
        (tmp_path / "go.mod").write_text("module x\n\nrequire gopkg.in/yaml.v3 v3.0.1\n")
        config = NoticeConfig(
            path=tmp_path,
            search=["go.mod"],
            ignore_dependencies=["Go", "go-yaml/yaml"],
        )
        mock_session.get.side_effect = route(
            {
                "https://gopkg.in/yaml.v3?go-get=1": make_response(
                    text='<meta name="go-import" content="gopkg.in/yaml.v3 git https://gopkg.in/yaml.v3">'
                ),
            }
        )

        result = NoticeGenerator(config, session=mock_session).run()

        assert result.dependencies == []
