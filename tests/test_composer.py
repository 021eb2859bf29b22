from unittest.mock import MagicMock

import pytest

from swagger_composer.descriptors.base import EndpointDescriptor, ParameterDescriptor
from swagger_composer.descriptors.loader import StaticDescriptorProvider
from swagger_composer.document.models import Info
from swagger_composer.document.writer import document_to_dict, dump_document
from swagger_composer.errors import ConfigurationError, ConflictingActionsError, UnknownApiVersionError
from swagger_composer.generator.composer import DocumentComposer
from swagger_composer.generator.filters import StaticTagDescriptions
from swagger_composer.generator.options import GeneratorOptions
from swagger_composer.generator.paths import first_action

VERSIONS = {"v1": Info(title="Users API", version="v1")}
MODELS = {"User": {"properties": {"id": "int64", "name": "string"}}}
ROOT = "http://localhost:5000"


def _ep(method: str, path: str, action: str = "Act", controller: str = "Users", **kwargs) -> EndpointDescriptor:
    return EndpointDescriptor(
        http_method=method, relative_path=path, controller=controller, action=action, **kwargs
    )


def _composer(descriptors: list[EndpointDescriptor], **options) -> DocumentComposer:
    return DocumentComposer(
        StaticDescriptorProvider(descriptors), VERSIONS, GeneratorOptions(**options), MODELS
    )


class TestScenarios:
    def test_get_and_post_share_a_path_item(self):
        doc = _composer([_ep("GET", "users/{id}", "Get"), _ep("POST", "users/{id}", "Update")]).generate(ROOT, "v1")
        item = doc.paths["/users/{id}"]
        assert item.get is not None and item.post is not None
        assert item.get.operation_id != item.post.operation_id

    def test_conflicting_gets_use_the_resolver(self):
        descriptors = [_ep("GET", "users", "List"), _ep("GET", "users?page={page}", "Page")]
        doc = _composer(descriptors, conflicting_actions_resolver=first_action).generate(ROOT, "v1")
        assert list(doc.paths) == ["/users"]
        assert doc.paths["/users"].operations().keys() == {"get"}

    def test_conflict_without_resolver_aborts(self):
        descriptors = [_ep("GET", "users", "List"), _ep("GET", "users", "Search")]
        with pytest.raises(ConflictingActionsError):
            _composer(descriptors).generate(ROOT, "v1")

    def test_response_types(self):
        doc = _composer([
            _ep("DELETE", "users/{id}", "Delete", response_type="none"),
            _ep("GET", "users/{id}", "Get", response_type="User"),
        ]).generate(ROOT, "v1")
        data = document_to_dict(doc)["paths"]["/users/{id}"]
        assert data["delete"]["responses"] == {"204": {"description": "No Content"}}
        assert data["get"]["responses"] == {
            "200": {"description": "OK", "schema": {"$ref": "#/definitions/User"}}
        }
        assert "User" in doc.definitions

    def test_unknown_version(self):
        with pytest.raises(UnknownApiVersionError) as exc:
            _composer([_ep("GET", "users")]).generate(ROOT, "v9")
        assert exc.value.api_version == "v9"

    def test_body_parameter_by_method(self):
        body = ParameterDescriptor(name="user", source="body", type_ref="User")
        doc = _composer([
            _ep("POST", "users", "Create", parameters=[body]),
            _ep("GET", "users", "Find", parameters=[body]),
        ]).generate(ROOT, "v1")
        post_param = doc.paths["/users"].post.parameters[0]
        get_param = doc.paths["/users"].get.parameters[0]
        assert post_param.in_ == "body"
        assert post_param.schema_ == {"$ref": "#/definitions/User"}
        assert get_param.in_ == "query"
        assert get_param.schema_ is None


class TestDocumentProperties:
    DESCRIPTORS = [
        _ep("GET", "users", "List", response_type="User[]"),
        _ep("GET", "/users/{id}?fields={fields}", "Get", response_type="User"),
        _ep("GET", "admin/users", "List", controller="Admin"),
        _ep("GET", "admin/users/", "List", controller="Admin"),
        _ep("GET", "admin/users//", "List", controller="Admin"),
        _ep("GET", "", "Root", controller="Home"),
    ]

    def test_operation_ids_are_unique(self):
        doc = _composer(self.DESCRIPTORS).generate(ROOT, "v1")
        ids = [op.operation_id for item in doc.paths.values() for op in item.operations().values()]
        assert len(ids) == 6
        assert len(set(ids)) == len(ids)

    def test_path_keys(self):
        doc = _composer(self.DESCRIPTORS).generate(ROOT, "v1")
        assert "/" in doc.paths
        assert "/users/{id}" in doc.paths
        for key in doc.paths:
            assert key.startswith("/")
            assert "?" not in key

    def test_generation_is_idempotent(self):
        composer = _composer(self.DESCRIPTORS, model_filters=[StaticTagDescriptions({"Users": "Users"})])
        assert dump_document(composer.generate(ROOT, "v1")) == dump_document(composer.generate(ROOT, "v1"))

    def test_empty_collections_are_absent(self):
        data = document_to_dict(_composer(self.DESCRIPTORS).generate(ROOT, "v1"))
        assert "tags" not in data
        for item in data["paths"].values():
            for op in item.values():
                assert "parameters" not in op
                assert "deprecated" not in op


class TestOrdering:
    DESCRIPTORS = [_ep("GET", "zoo", controller="Zoo"), _ep("GET", "animals", controller="Animals")]

    def test_paths_ordered_by_grouping_key(self):
        doc = _composer(self.DESCRIPTORS).generate(ROOT, "v1")
        assert list(doc.paths) == ["/animals", "/zoo"]

    def test_custom_comparer(self):
        def reverse(a, b):
            return (a < b) - (a > b)

        doc = _composer(self.DESCRIPTORS, grouping_key_comparer=reverse).generate(ROOT, "v1")
        assert list(doc.paths) == ["/zoo", "/animals"]


class TestFiltering:
    def test_obsolete_kept_and_deprecated_by_default(self):
        doc = _composer([_ep("GET", "old", obsolete=True)]).generate(ROOT, "v1")
        assert doc.paths["/old"].get.deprecated is True

    def test_obsolete_dropped_when_ignored(self):
        doc = _composer([_ep("GET", "old", obsolete=True), _ep("GET", "new")], ignore_obsolete_actions=True).generate(ROOT, "v1")
        assert list(doc.paths) == ["/new"]

    def test_version_support_resolver(self):
        resolver = MagicMock(side_effect=lambda d, v: d.relative_path.startswith(v))
        doc = _composer([_ep("GET", "v1/users"), _ep("GET", "v2/users")], version_support_resolver=resolver).generate(ROOT, "v1")
        assert list(doc.paths) == ["/v1/users"]
        assert resolver.call_count == 2


class TestRootUrl:
    def test_non_default_port_and_base_path(self):
        doc = _composer([]).generate("http://localhost:5000/api", "v1")
        assert doc.host == "localhost:5000"
        assert doc.base_path == "/api"
        assert doc.schemes == ["http"]

    def test_default_port_is_dropped(self):
        doc = _composer([]).generate("https://Example.com:443/", "v1")
        assert doc.host == "example.com"
        assert doc.base_path is None
        assert doc.schemes == ["https"]

    def test_configured_schemes_win(self):
        doc = _composer([], schemes=["https", "wss"]).generate("http://example.com", "v1")
        assert doc.schemes == ["https", "wss"]

    def test_invalid_root_url(self):
        with pytest.raises(ConfigurationError):
            _composer([]).generate("not a url", "v1")


class TestDocument:
    def test_info_and_security_definitions(self):
        security = {"basic": {"type": "basic"}}
        doc = _composer([], security_definitions=security).generate(ROOT, "v1")
        data = document_to_dict(doc)
        assert data["swagger"] == "2.0"
        assert data["info"] == {"title": "Users API", "version": "v1"}
        assert data["securityDefinitions"] == security

    def test_tags_from_model_filters(self):
        doc = _composer(
            [_ep("GET", "users"), _ep("GET", "store", controller="Store")],
            model_filters=[StaticTagDescriptions({"Users": "User accounts"})],
        ).generate(ROOT, "v1")
        assert [(t.name, t.description) for t in doc.tags] == [("Users", "User accounts")]

    def test_document_filters_run_in_order_and_mutate(self):
        class AddTitleSuffix:
            def __init__(self, suffix):
                self.suffix = suffix

            def apply(self, document, schema_registry, provider):
                document.info.title += self.suffix

        composer = _composer([], document_filters=[AddTitleSuffix(" A"), AddTitleSuffix(" B")])
        assert composer.generate(ROOT, "v1").info.title == "Users API A B"
        # the configured version map is left untouched
        assert VERSIONS["v1"].title == "Users API"
        assert composer.generate(ROOT, "v1").info.title == "Users API A B"

    def test_document_filter_receives_registry_and_provider(self):
        document_filter = MagicMock()
        document_filter.apply.side_effect = lambda doc, registry, provider: registry.get_or_register("User")
        composer = _composer([_ep("GET", "users")], document_filters=[document_filter])

        doc = composer.generate(ROOT, "v1")

        _, registry, provider = document_filter.apply.call_args.args
        assert provider is composer.provider
        assert "User" in doc.definitions

    def test_filter_errors_propagate(self):
        class Broken:
            def apply(self, operation, schema_registry, descriptor):
                raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            _composer([_ep("GET", "users")], operation_filters=[Broken()]).generate(ROOT, "v1")

    def test_each_call_gets_fresh_definitions(self):
        composer = _composer([_ep("GET", "users", response_type="User")])
        first = composer.generate(ROOT, "v1")
        second = composer.generate(ROOT, "v1")
        assert first.definitions == second.definitions
        assert first.definitions is not second.definitions
