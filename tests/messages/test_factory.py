# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for MessageFactory — locale registry, init and locale switching."""

from __future__ import annotations

import gc
import threading
from collections.abc import Callable
from pathlib import Path

import pytest

from g11n.kernel.exceptions import (
    LocaleLoadException,
    MessageSignatureException,
    UnknownFormatException,
    UnknownLocaleException,
    UnsupportedFieldException,
)
from g11n.locale.loaders import register_loader, unregister_loader
from g11n.messages.declaration import message, message_record
from g11n.messages.dispatch import MessageFunction
from g11n.messages.factory import LocaleInfo, MessageFactory


class Greeter:
    Hello: Callable[[str], str] = message("Hello, %v!")


class Labels:
    title: str = message("Welcome")
    farewell: str = message("Goodbye")
    count: Callable[[int], str] = message("%d items")


class Shouting(str):
    def format_result(self, formatted: str) -> str:
        return formatted.upper() + "!"


class Name:
    def __init__(self, first: str, last: str) -> None:
        self.first = first
        self.last = last

    def format_as_param(self) -> str:
        return f"{self.last}, {self.first}"

    def __str__(self) -> str:
        return "Name object"


class Formatted:
    banner: Shouting = message("hello")
    greet: Callable[[Name], Shouting] = message("hi %v")
    plain: Callable[[Name], str] = message("hi %v")


class Common:
    ok: str = message("OK")
    cancel: str = message("Cancel")


class Dialog:
    common: Common
    title: str = message("Confirm")


class PlainCommon:
    ok: str = "OK"


class PlainDialog:
    common: PlainCommon


class Bare:
    greet: Callable[[str], str]


class Holder:
    bare: Bare


class TwoResults:
    pair: Callable[[str], tuple[str, str]] = message("%v")


class NoResult:
    nothing: Callable[[str], None] = message("%v")


class BadField:
    amount: int = 3


class Base:
    shared: str = message("Shared")


class Derived(Base):
    own: str = message("Own")


@message_record(namespace="billing.Greeter")
class BillingGreeter:
    Hello: Callable[[str], str] = message("Hi %v")


class Slotted:
    __slots__ = ("title",)

    title: str


class FakeLoader:
    def __init__(self, dictionaries: dict[str, dict[str, str]]) -> None:
        self.dictionaries = dictionaries
        self.calls: list[str] = []

    def load(self, path: str) -> dict[str, str]:
        self.calls.append(path)
        return self.dictionaries[path]


@pytest.fixture
def fake_loader():
    loader = FakeLoader(
        {
            "fr.fake": {
                "Greeter.Hello": "Bonjour, %v!",
                "Labels.title": "Bienvenue",
                "Labels.count": "%d articles",
                "Formatted.banner": "salut",
                "Formatted.greet": "salut %v",
                "Common.ok": "D'accord",
                "PlainCommon.ok": "D'accord",
                "Bare.greet": "Salut %v",
                "Dialog.title": "Confirmer",
                "Base.shared": "Partagé",
                "Derived.own": "Propre",
                "billing.Greeter.Hello": "Salut %v",
            },
            "de.fake": {
                "Greeter.Hello": "Hallo, %v!",
                "Labels.title": "Willkommen",
            },
        }
    )
    register_loader("fake", loader)
    yield loader
    unregister_loader("fake")


@pytest.fixture
def factory(fake_loader):
    factory = MessageFactory()
    factory.set_locales({"fr": "fr.fake", "de": "de.fake"}, "fake")
    return factory


class TestLocaleRegistry:
    def test_new_factory_is_empty(self):
        factory = MessageFactory()
        assert factory.locales() == []
        assert dict(factory.dictionary) == {}
        assert factory.active_locale is None
        assert factory.refresh_count == 0

    def test_set_locale_registers_info(self):
        factory = MessageFactory()
        factory.set_locale("fr", "yaml", "fr.yaml")
        assert factory.locales() == ["fr"]
        assert factory.locale_info("fr") == LocaleInfo(format="yaml", path="fr.yaml")

    def test_last_registration_wins(self):
        factory = MessageFactory()
        factory.set_locale("fr", "yaml", "old.yaml")
        factory.set_locale("fr", "json", "new.json")
        assert factory.locale_info("fr") == LocaleInfo(format="json", path="new.json")
        assert len(factory.locales()) == 1

    def test_set_locales_uses_shared_format(self):
        factory = MessageFactory()
        factory.set_locales({"fr": "fr.yaml", "de": "de.yaml"}, "yaml")
        assert set(factory.locales()) == {"fr", "de"}
        assert factory.locale_info("de").format == "yaml"

    def test_registration_does_not_validate(self):
        factory = MessageFactory()
        factory.set_locale("xx", "no-such-format", "/no/such/file")
        assert factory.locales() == ["xx"]

    def test_tags_can_be_any_hashable(self, fake_loader):
        factory = MessageFactory()
        factory.set_locale(("fr", "FR"), "fake", "fr.fake")
        greeter = factory.create(Greeter)
        factory.load_locale(("fr", "FR"))
        assert greeter.Hello("Sam") == "Bonjour, Sam!"


class TestLoadLocale:
    def test_greeter_scenario(self, tmp_path: Path):
        (tmp_path / "fr.yaml").write_text('Greeter.Hello: "Bonjour, %v!"\n', encoding="utf-8")
        factory = MessageFactory()
        factory.set_locale("fr", "yaml", str(tmp_path / "fr.yaml"))
        greeter = factory.init(Greeter())

        assert greeter.Hello("Sam") == "Hello, Sam!"
        factory.load_locale("fr")
        assert greeter.Hello("Sam") == "Bonjour, Sam!"

    def test_unknown_locale_raises(self, factory):
        with pytest.raises(UnknownLocaleException, match="Unknown locale 'es'."):
            factory.load_locale("es")

    def test_unknown_locale_leaves_dictionary_untouched(self, factory):
        factory.load_locale("de")
        before = factory.dictionary
        with pytest.raises(UnknownLocaleException) as exc_info:
            factory.load_locale("es")
        assert factory.dictionary is before
        assert factory.active_locale == "de"
        assert exc_info.value.code == "UNKNOWN_LOCALE"
        assert exc_info.value.context["locale"] == "es"

    def test_unknown_format_raises(self):
        factory = MessageFactory()
        factory.set_locale("fr", "klingon", "fr.kl")
        with pytest.raises(UnknownFormatException, match="Unknown locale format 'klingon'.") as exc_info:
            factory.load_locale("fr")
        assert exc_info.value.context["format"] == "klingon"
        assert dict(factory.dictionary) == {}

    def test_loader_failure_leaves_dictionary_untouched(self, tmp_path: Path):
        factory = MessageFactory()
        factory.set_locale("fr", "yaml", str(tmp_path / "missing.yaml"))
        labels = factory.create(Labels)
        with pytest.raises(LocaleLoadException):
            factory.load_locale("fr")
        assert dict(factory.dictionary) == {}
        assert labels.title == "Welcome"

    def test_dictionary_is_replaced_not_merged(self, factory):
        factory.load_locale("fr")
        factory.load_locale("de")
        assert "Labels.count" not in factory.dictionary
        assert factory.dictionary["Labels.title"] == "Willkommen"

    def test_dictionary_is_read_only(self, factory):
        factory.load_locale("fr")
        with pytest.raises(TypeError):
            factory.dictionary["Labels.title"] = "x"  # type: ignore[index]

    def test_active_locale_tracks_last_load(self, factory):
        factory.load_locale("fr")
        assert factory.active_locale == "fr"
        factory.load_locale("de")
        assert factory.active_locale == "de"

    def test_loader_receives_registered_path(self, factory, fake_loader):
        factory.load_locale("fr")
        assert fake_loader.calls == ["fr.fake"]


class TestStringFields:
    def test_default_pattern_before_load(self, factory):
        labels = factory.create(Labels)
        assert labels.title == "Welcome"
        assert labels.farewell == "Goodbye"

    def test_refreshed_on_load(self, factory):
        labels = factory.create(Labels)
        factory.load_locale("fr")
        assert labels.title == "Bienvenue"

    def test_missing_key_falls_back_to_default(self, factory):
        labels = factory.create(Labels)
        factory.load_locale("fr")
        assert labels.farewell == "Goodbye"

    def test_every_instance_is_refreshed(self, factory):
        first = factory.create(Labels)
        second = factory.create(Labels)
        factory.load_locale("de")
        assert first.title == second.title == "Willkommen"

    def test_switching_back_and_forth(self, factory):
        labels = factory.create(Labels)
        factory.load_locale("fr")
        factory.load_locale("de")
        assert labels.title == "Willkommen"
        factory.load_locale("fr")
        assert labels.title == "Bienvenue"

    def test_result_hook_applies_only_at_init(self, factory):
        formatted = factory.create(Formatted)
        assert formatted.banner == "HELLO!"
        assert isinstance(formatted.banner, Shouting)

        factory.load_locale("fr")
        assert formatted.banner == "salut"
        assert isinstance(formatted.banner, Shouting)

    def test_reinit_keeps_one_callback_per_field(self, factory):
        labels = factory.create(Labels)
        factory.init(labels)
        assert factory.refresh_count == 2

    def test_collected_records_are_pruned(self, factory):
        factory.create(Labels)
        kept = factory.create(Labels)
        gc.collect()
        assert factory.refresh_count == 2

        factory.load_locale("fr")
        assert kept.title == "Bienvenue"
        assert len(factory._refreshers) == 2

    def test_refresh_count_while_locales_load(self, factory):
        errors: list[BaseException] = []

        def churn() -> None:
            try:
                for _ in range(200):
                    factory.create(Labels)
                    factory.load_locale("fr")
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        worker = threading.Thread(target=churn)
        worker.start()
        while worker.is_alive():
            assert factory.refresh_count >= 0
        worker.join()
        assert errors == []

    def test_records_without_weakref_support_are_kept(self, factory):
        slotted = factory.create(Slotted)
        assert slotted.title == ""
        factory.load_locale("fr")
        assert slotted.title == ""
        assert factory.refresh_count == 1

    def test_release_stops_refreshing(self, factory):
        labels = factory.create(Labels)
        factory.release(labels)
        factory.load_locale("fr")
        assert labels.title == "Welcome"
        assert factory.refresh_count == 0

    def test_release_covers_embedded_records(self, factory):
        dialog = factory.create(Dialog)
        factory.release(dialog)
        factory.load_locale("fr")
        assert dialog.common.ok == "OK"
        assert dialog.title == "Confirm"


class TestFunctionFields:
    def test_assigns_message_function(self, factory):
        greeter = factory.create(Greeter)
        assert isinstance(greeter.Hello, MessageFunction)
        assert greeter.Hello.key == "Greeter.Hello"

    def test_picks_up_new_locale_without_reinit(self, factory):
        greeter = factory.create(Greeter)
        factory.load_locale("de")
        assert greeter.Hello("Sam") == "Hallo, Sam!"
        factory.load_locale("fr")
        assert greeter.Hello("Sam") == "Bonjour, Sam!"

    def test_missing_key_uses_default_pattern(self, factory):
        labels = factory.create(Labels)
        factory.load_locale("de")
        assert labels.count(3) == "3 items"

    def test_function_fields_register_no_callback(self, factory):
        factory.create(Greeter)
        assert factory.refresh_count == 0

    def test_param_hook_replaces_str(self, factory):
        formatted = factory.create(Formatted)
        assert formatted.plain(Name("Ada", "Lovelace")) == "hi Lovelace, Ada"

    def test_result_hook_always_applies(self, factory):
        formatted = factory.create(Formatted)
        assert formatted.greet(Name("Ada", "Lovelace")) == "HI LOVELACE, ADA!"
        factory.load_locale("fr")
        result = formatted.greet(Name("Ada", "Lovelace"))
        assert result == "SALUT LOVELACE, ADA!"
        assert isinstance(result, Shouting)

    def test_malformed_pattern_does_not_raise(self, factory):
        labels = factory.create(Labels)
        assert labels.count("many") == "%!d(str=many) items"

    def test_wrong_argument_count_raises_type_error(self, factory):
        greeter = factory.create(Greeter)
        with pytest.raises(TypeError):
            greeter.Hello("Sam", "Max")

    def test_two_results_rejected(self, factory):
        with pytest.raises(MessageSignatureException, match="Expected 1, got 2") as exc_info:
            factory.create(TwoResults)
        assert exc_info.value.context["count"] == 2

    def test_no_result_rejected(self, factory):
        with pytest.raises(MessageSignatureException, match="got 0"):
            factory.create(NoResult)

    def test_rejected_record_registers_nothing(self, factory):
        class Mixed:
            title: str = message("Title")
            pair: Callable[[str], tuple[str, str]] = message("%v")

        with pytest.raises(MessageSignatureException):
            factory.init(Mixed())
        assert factory.refresh_count == 0


class TestRecords:
    def test_init_returns_same_instance(self, factory):
        labels = Labels()
        assert factory.init(labels) is labels

    def test_init_rejects_classes(self, factory):
        with pytest.raises(TypeError):
            factory.init(Labels)

    def test_embedded_record_is_created_and_wired(self, factory):
        dialog = factory.create(Dialog)
        assert isinstance(dialog.common, Common)
        assert dialog.common.ok == "OK"
        factory.load_locale("fr")
        assert dialog.common.ok == "D'accord"
        assert dialog.common.cancel == "Cancel"
        assert dialog.title == "Confirmer"

    def test_undecorated_plain_default_record_is_embedded(self, factory):
        dialog = factory.init(PlainDialog())
        assert isinstance(dialog.common, PlainCommon)
        assert dialog.common.ok == "OK"
        factory.load_locale("fr")
        assert dialog.common.ok == "D'accord"

    def test_record_without_defaults_is_embedded(self, factory):
        holder = factory.init(Holder())
        assert isinstance(holder.bare, Bare)
        assert holder.bare.greet("Sam") == "%!(EXTRA str=Sam)"
        factory.load_locale("fr")
        assert holder.bare.greet("Sam") == "Salut Sam"

    def test_embedded_records_are_independent(self, factory):
        first = factory.create(Dialog)
        second = factory.create(Dialog)
        assert first.common is not second.common

    def test_inherited_fields_use_declaring_type_key(self, factory):
        derived = factory.create(Derived)
        factory.load_locale("fr")
        assert derived.shared == "Partagé"
        assert derived.own == "Propre"

    def test_namespace_prefixes_keys(self, factory):
        greeter = factory.create(BillingGreeter)
        factory.load_locale("fr")
        assert greeter.Hello("Sam") == "Salut Sam"

    def test_unsupported_field_rejected(self, factory):
        with pytest.raises(UnsupportedFieldException):
            factory.create(BadField)


class TestMessageHelper:
    def test_formats_default_before_load(self, factory):
        assert factory.message("Greeter.Hello", "Hello, %v!", "Sam") == "Hello, Sam!"

    def test_formats_loaded_pattern(self, factory):
        factory.load_locale("fr")
        assert factory.message("Greeter.Hello", "Hello, %v!", "Sam") == "Bonjour, Sam!"

    def test_applies_param_hook(self, factory):
        assert factory.message("x", "%v", Name("Ada", "Lovelace")) == "Lovelace, Ada"
