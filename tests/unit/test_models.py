"""Tests for plugin descriptors, signature errors and reports."""

from __future__ import annotations

import gc

import pytest

from plugingate.models.errors import ErrorCode, PluginSignatureError
from plugingate.models.plugin import (
    PluginClass,
    PluginDescriptor,
    SignatureStatus,
    SignatureType,
)
from plugingate.models.reports import PluginDecision, ValidationReport


class TestEnums:
    def test_signature_status_values(self):
        assert SignatureStatus.VALID == "valid"
        assert SignatureStatus.INVALID == "invalid"
        assert SignatureStatus.MODIFIED == "modified"
        assert SignatureStatus.UNSIGNED == "unsigned"
        assert SignatureStatus.INTERNAL == "internal"

    def test_signature_type_values(self):
        assert SignatureType.PRIVATE_GLOB == "private-glob"
        assert SignatureType.COMMUNITY == "community"

    def test_plugin_class_values(self):
        assert {c.value for c in PluginClass} == {"core", "bundled", "external"}


class TestPluginDescriptor:
    def test_known_strings_become_enum_members(self):
        plugin = PluginDescriptor("p", "modified", signature_type="commercial", plugin_class="bundled")
        assert plugin.signature is SignatureStatus.MODIFIED
        assert plugin.signature_type is SignatureType.COMMERCIAL
        assert plugin.plugin_class is PluginClass.BUNDLED

    def test_unknown_status_kept_raw(self):
        plugin = PluginDescriptor("p", "quantum-signed")
        assert plugin.signature == "quantum-signed"
        assert not isinstance(plugin.signature, SignatureStatus)

    def test_unknown_class_rejected(self):
        with pytest.raises(ValueError):
            PluginDescriptor("p", "valid", plugin_class="trusted")

    def test_classification_flags(self):
        assert PluginDescriptor("c", "internal", plugin_class="core").is_core_plugin
        assert PluginDescriptor("b", "unsigned", plugin_class="bundled").is_bundled_plugin
        ext = PluginDescriptor("e", "unsigned")
        assert not ext.is_core_plugin
        assert not ext.is_bundled_plugin

    def test_add_child_sets_parent(self):
        root = PluginDescriptor("root", "valid")
        child = root.add_child(PluginDescriptor("child", "unsigned"))
        assert child.parent is root
        assert root.children == [child]
        assert root.parent is None

    def test_children_in_constructor_are_linked(self):
        child = PluginDescriptor("child", "unsigned")
        root = PluginDescriptor("root", "valid", children=[child])
        assert child.parent is root

    def test_parent_link_is_weak(self):
        root = PluginDescriptor("root", "valid")
        child = root.add_child(PluginDescriptor("child", "unsigned"))
        del root
        gc.collect()
        assert child.parent is None

    def test_add_child_rejects_second_parent(self):
        a = PluginDescriptor("a", "valid")
        b = PluginDescriptor("b", "valid")
        child = a.add_child(PluginDescriptor("child", "unsigned"))
        with pytest.raises(ValueError, match="already nested"):
            b.add_child(child)

    def test_add_child_rejects_cycle(self):
        root = PluginDescriptor("root", "valid")
        child = root.add_child(PluginDescriptor("child", "unsigned"))
        with pytest.raises(ValueError, match="cycle"):
            child.add_child(root)
        with pytest.raises(ValueError, match="cycle"):
            root.add_child(root)

    def test_walk_is_preorder(self):
        root = PluginDescriptor("root", "valid")
        a = root.add_child(PluginDescriptor("a", "unsigned"))
        a.add_child(PluginDescriptor("a1", "unsigned"))
        root.add_child(PluginDescriptor("b", "unsigned"))
        assert [p.id for p in root.walk()] == ["root", "a", "a1", "b"]


class TestPluginSignatureError:
    @pytest.mark.parametrize(
        ("status", "code", "message"),
        [
            (SignatureStatus.UNSIGNED, ErrorCode.SIGNATURE_MISSING, "plugin 'p1' has no signature"),
            (SignatureStatus.INVALID, ErrorCode.SIGNATURE_INVALID, "plugin 'p1' has an invalid signature"),
            (SignatureStatus.MODIFIED, ErrorCode.SIGNATURE_MODIFIED, "plugin 'p1' has a modified signature"),
            (None, None, "plugin 'p1' has an unknown signature state"),
        ],
    )
    def test_code_and_message(self, status, code, message):
        err = PluginSignatureError("p1", status)
        assert err.plugin_id == "p1"
        assert err.signature_status == status
        assert err.error_code == code
        assert str(err) == message

    def test_is_raisable(self):
        with pytest.raises(PluginSignatureError, match="has no signature"):
            raise PluginSignatureError("p1", SignatureStatus.UNSIGNED)

    def test_to_dict(self):
        assert PluginSignatureError("p1", SignatureStatus.INVALID).to_dict() == {
            "plugin_id": "p1",
            "signature_status": "invalid",
            "error_code": "signatureInvalid",
            "message": "plugin 'p1' has an invalid signature",
        }
        unknown = PluginSignatureError("p2").to_dict()
        assert unknown["signature_status"] == ""
        assert unknown["error_code"] == ""


class TestValidationReport:
    def _report(self) -> ValidationReport:
        return ValidationReport(decisions=[
            PluginDecision(plugin_id="a", plugin_class="external", signature="valid", allowed=True),
            PluginDecision(
                plugin_id="b", parent_id="a", plugin_class="external",
                signature="invalid", allowed=False, error_code="signatureInvalid",
            ),
        ])

    def test_accessors(self):
        report = self._report()
        assert report.allowed_ids == ["a"]
        assert [d.plugin_id for d in report.rejected] == ["b"]
        assert report.ok is False
        assert report.get("b").parent_id == "a"
        assert report.get("missing") is None

    def test_empty_report_is_ok(self):
        assert ValidationReport().ok is True

    def test_decision_frozen(self):
        decision = self._report().decisions[0]
        with pytest.raises(Exception):
            decision.allowed = False
