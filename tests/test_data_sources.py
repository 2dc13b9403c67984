"""
Tests for the data providers.

This module tests literal, generated and composed data, with a focus on the
composed InlineAutoData provider: literal precedence, generation of the
remaining parameters, injection of custom builders and configuration errors.
"""

from unittest.mock import MagicMock

import pytest
from conftest import RecordingBuilder, make_parameters

from autospecimen.config import FixtureConfig
from autospecimen.data import (
    AutoData,
    CompositeData,
    InlineAutoData,
    InlineData,
    format_row_id,
)
from autospecimen.domain.models import (
    DataConfigurationError,
    DataRow,
    SpecimenCreationError,
)
from autospecimen.fixture import Fixture, InjectCustomization


class TestInlineData:
    """Test the literal value provider."""

    def test_yields_values_verbatim(self, int_parameters):
        rows = InlineData(1, 2, 3).get_data(int_parameters)

        assert rows == [DataRow(values=(1, 2, 3), id="1-2-3")]

    def test_fewer_values_than_parameters(self, int_parameters):
        rows = InlineData(1).get_data(int_parameters)
        assert rows[0].values == (1,)

    def test_too_many_values_raises(self):
        with pytest.raises(DataConfigurationError, match="3 inline value"):
            InlineData(1, 2, 3).get_data(make_parameters(int))

    def test_values_property(self):
        assert InlineData("a", None).values == ("a", None)

    def test_provides_get_data(self):
        assert callable(InlineData().get_data)


class TestAutoData:
    """Test the generated value provider."""

    def test_generates_one_value_per_parameter(self, recording_builder):
        parameters = make_parameters(int, str)

        rows = AutoData(recording_builder).get_data(parameters)

        assert rows == [DataRow(values=(100, 101))]
        assert recording_builder.requests == [(int, "p0"), (str, "p1")]

    def test_no_parameters_no_requests(self, recording_builder):
        rows = AutoData(recording_builder).get_data([])

        assert rows == [DataRow()]
        assert recording_builder.requests == []

    def test_default_fixture(self):
        assert isinstance(AutoData().fixture, Fixture)

    def test_fixture_is_held_by_reference(self, specimen_fixture):
        assert AutoData(specimen_fixture).fixture is specimen_fixture

    def test_rejects_non_builder(self):
        with pytest.raises(TypeError):
            AutoData(object())

    def test_accepts_mock_builder(self):
        """Any object with a create method is a builder."""
        builder = MagicMock()
        builder.create.return_value = 5

        rows = AutoData(builder).get_data(make_parameters(int))

        assert rows[0].values == (5,)
        builder.create.assert_called_once_with(int, name="p0")

    def test_builder_errors_propagate_unchanged(self):
        error = SpecimenCreationError("cannot build Widget")
        builder = MagicMock()
        builder.create.side_effect = error

        with pytest.raises(SpecimenCreationError) as exc_info:
            AutoData(builder).get_data(make_parameters(object))
        assert exc_info.value is error


class TestCompositeData:
    """Test positional composition of providers."""

    def test_earlier_source_takes_precedence(self, recording_builder, int_parameters):
        composite = CompositeData(InlineData(7), AutoData(recording_builder))

        rows = composite.get_data(int_parameters)

        assert rows == [DataRow(values=(7, 100, 101), id="7")]
        assert recording_builder.requests == [(int, "p1"), (int, "p2")]

    def test_complete_row_skips_later_sources(self, int_parameters):
        later = MagicMock()

        rows = CompositeData(InlineData(1, 2, 3), later).get_data(int_parameters)

        assert rows[0].values == (1, 2, 3)
        later.get_data.assert_not_called()

    def test_short_row_raises(self, int_parameters):
        composite = CompositeData(InlineData(1), InlineData(2))

        with pytest.raises(DataConfigurationError, match="supplies 2 value"):
            composite.get_data(int_parameters)

    def test_three_sources(self, recording_builder, int_parameters):
        composite = CompositeData(
            InlineData(1), InlineData(2), AutoData(recording_builder)
        )

        rows = composite.get_data(int_parameters)

        assert rows[0].values == (1, 2, 100)
        assert rows[0].id == "1-2"

    def test_rows_follow_first_source(self, int_parameters):
        first = MagicMock()
        first.get_data.return_value = [
            DataRow(values=(1,), id="a"),
            DataRow(values=(2,), id="b"),
        ]
        second = MagicMock()
        second.get_data.return_value = [
            DataRow(values=(10, 11)),
            DataRow(values=(20, 21)),
        ]

        rows = CompositeData(first, second).get_data(int_parameters)

        assert [row.values for row in rows] == [(1, 10, 11), (2, 20, 21)]
        second.get_data.assert_called_with(int_parameters[1:])

    def test_requires_a_source(self):
        with pytest.raises(DataConfigurationError):
            CompositeData()

    def test_rejects_non_source(self):
        with pytest.raises(TypeError):
            CompositeData(InlineData(), object())


class TestInlineAutoData:
    """Test the composed literal-plus-generated provider."""

    @pytest.mark.parametrize(
        "literals",
        [(), (1337,), (1337, 7), (1337, 7, 42)],
        ids=["none", "one", "two", "all"],
    )
    def test_row_has_literals_then_generated(
        self, literals, recording_builder, int_parameters
    ):
        source = InlineAutoData(*literals, auto_data=recording_builder)

        rows = source.get_data(int_parameters)

        assert len(rows) == 1
        row = rows[0].values
        assert len(row) == len(int_parameters)
        assert row[: len(literals)] == literals
        generated = len(int_parameters) - len(literals)
        assert row[len(literals) :] == tuple(range(100, 100 + generated))
        assert len(recording_builder.requests) == generated

    def test_no_literals_is_pure_generation(self, recording_builder, int_parameters):
        rows = InlineAutoData(auto_data=recording_builder).get_data(int_parameters)

        assert rows[0].values == (100, 101, 102)

    def test_all_literals_never_invokes_builder(self, int_parameters):
        builder = MagicMock()

        rows = InlineAutoData(1, 2, 3, auto_data=builder).get_data(int_parameters)

        assert rows[0].values == (1, 2, 3)
        builder.create.assert_not_called()

    def test_too_many_literals_raises(self, recording_builder):
        source = InlineAutoData(1, 2, 3, auto_data=recording_builder)

        with pytest.raises(DataConfigurationError):
            source.get_data(make_parameters(int, int))
        assert recording_builder.requests == []

    def test_values_exposed_verbatim(self):
        source = InlineAutoData(1337, 7, 42)
        assert source.values == (1337, 7, 42)
        assert list(source.values) == [1337, 7, 42]

    def test_default_auto_data(self):
        source = InlineAutoData(1)
        assert isinstance(source.auto_data, AutoData)
        assert isinstance(source.fixture, Fixture)

    def test_custom_auto_data_identity_preserved(self, specimen_fixture):
        auto = AutoData(specimen_fixture)

        source = InlineAutoData.with_auto_data(auto, 1337)

        assert source.auto_data is auto
        assert source.fixture is specimen_fixture
        assert source.values == (1337,)

    def test_bare_builder_is_wrapped(self, recording_builder):
        source = InlineAutoData(1, auto_data=recording_builder)

        assert isinstance(source.auto_data, AutoData)
        assert source.fixture is recording_builder

    def test_custom_builder_used_for_every_generated_entry(self, int_parameters):
        builder = RecordingBuilder(start=500)
        source = InlineAutoData.with_auto_data(AutoData(builder), 1)

        rows = source.get_data(int_parameters)

        assert rows[0].values == (1, 500, 501)
        assert [name for _, name in builder.requests] == ["p1", "p2"]

    def test_customized_fixture_overlays_literals(self, int_parameters):
        fixture = Fixture(FixtureConfig()).customize(InjectCustomization(int, 42))
        source = InlineAutoData(1337, auto_data=AutoData(fixture))

        rows = source.get_data(int_parameters)

        assert rows[0].values == (1337, 42, 42)

    def test_generation_failure_propagates(self):
        error = SpecimenCreationError("abstract")
        builder = MagicMock()
        builder.create.side_effect = error

        with pytest.raises(SpecimenCreationError) as exc_info:
            InlineAutoData(1, auto_data=builder).get_data(make_parameters(int, object))
        assert exc_info.value is error

    def test_row_id_from_literals(self, recording_builder, int_parameters):
        rows = InlineAutoData(1337, "x", auto_data=recording_builder).get_data(
            int_parameters
        )
        assert rows[0].id == "1337-x"

    def test_values_not_mutated_by_production(self, recording_builder, int_parameters):
        source = InlineAutoData(1, auto_data=recording_builder)
        source.get_data(int_parameters)
        source.get_data(int_parameters)
        assert source.values == (1,)


class TestFormatRowId:
    def test_scalars_and_objects(self):
        assert format_row_id([1, "a", None, True, 2.5]) == "1-a-None-True-2.5"
        assert format_row_id([object(), [1]]) == "object-list"
        assert format_row_id([]) == ""
