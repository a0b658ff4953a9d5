"""Integration tests running filters against a seeded in-memory SQLite store."""

import pytest

from snapshot_filters.constants import Qualifier, Scope
from snapshot_filters.model import DateCriterion, Filter, MeasureCriterion

from conftest import COVERAGE, DUPLICATED_LINES, LINES


def _ids(result):
    return set(result.snapshot_ids())


class TestSharedDataset:
    """Selection and sorting on projects, modules and packages."""

    @pytest.fixture
    def executor(self, make_executor):
        return make_executor("shared")

    def test_filter_without_qualifiers_returns_nothing(self, executor):
        result = executor.execute(Filter())
        assert result.size() == 0

    def test_filter_on_scopes(self, executor):
        f = Filter.create_for_all_qualifiers().set_scopes({Scope.SPACE})
        assert _ids(executor.execute(f)) == {4}

    def test_filter_on_qualifiers(self, executor):
        f = Filter().set_qualifiers({Qualifier.PROJECT, Qualifier.MODULE})
        assert _ids(executor.execute(f)) == {2, 3}

    def test_filter_on_languages(self, executor):
        f = Filter.create_for_all_qualifiers().set_languages({"java"})
        assert _ids(executor.execute(f)) == {2, 4}

    @pytest.mark.parametrize("pattern", ["org.apache:maven_plugin", "org.apache:maven%plugin", "org.apache:%"])
    def test_like_metacharacters_in_key_pattern_match_literally(self, executor, pattern):
        f = Filter.create_for_all_qualifiers().set_key_regexp(pattern)
        assert executor.execute(f).size() == 0

    def test_star_matches_any_characters(self, executor):
        f = Filter.create_for_all_qualifiers().set_key_regexp("org.apache:maven*")
        assert _ids(executor.execute(f)) == {3}

    def test_filter_on_resource_ids(self, executor):
        f = Filter.create_for_all_qualifiers().set_resource_ids({1})
        assert _ids(executor.execute(f)) == {2}

        f.set_resource_ids({1, 3})
        assert _ids(executor.execute(f)) == {2, 4}

    def test_old_snapshots_are_ignored(self, executor):
        f = Filter().set_qualifiers({"TRK"})
        assert executor.execute(f).snapshot_ids() == [2]

    def test_filter_on_date_after(self, executor):
        f = Filter.create_for_all_qualifiers().set_date_criterion(DateCriterion.parse(">", "2008-12-26 00:00"))
        assert _ids(executor.execute(f)) == {3}

    def test_filter_on_date_before(self, executor):
        f = Filter.create_for_all_qualifiers().set_date_criterion(DateCriterion.parse("<", "2008-12-25 03:00"))
        assert _ids(executor.execute(f)) == {2, 4}

    def test_date_criterion_keeps_time_precision(self, executor):
        f = Filter.create_for_all_qualifiers().set_date_criterion(DateCriterion.parse("<", "2008-12-25 01:30"))
        assert _ids(executor.execute(f)) == {2}

    def test_filter_on_direct_children(self, executor):
        f = Filter.create_for_all_qualifiers().set_path(2, 0, "")
        assert _ids(executor.execute(f)) == {4}

    def test_filter_on_descendants(self, executor):
        f = Filter.create_for_all_qualifiers().set_path(2, 0, "2.")
        assert _ids(executor.execute(f)) == {4}

    def test_sort_by_name(self, executor):
        f = Filter.create_for_all_qualifiers().set_sorted_by_name()
        assert executor.execute(f).snapshot_ids() == [2, 4, 3]

    def test_sort_by_key(self, executor):
        f = Filter.create_for_all_qualifiers().set_sorted_by_key()
        assert executor.execute(f).snapshot_ids() == [3, 2, 4]

    def test_sort_by_date(self, executor):
        f = Filter.create_for_all_qualifiers().set_sorted_by_date()
        assert executor.execute(f).snapshot_ids() == [2, 4, 3]

        f.set_ascending_sort(False)
        assert executor.execute(f).snapshot_ids() == [3, 4, 2]

    def test_descending_sort_reverses_ties(self, executor):
        f = Filter.create_for_all_qualifiers().set_sorted_by_language()
        ascending = executor.execute(f).snapshot_ids()
        descending = executor.execute(f.set_ascending_sort(False)).snapshot_ids()

        assert ascending == [2, 4, 3]
        assert descending == list(reversed(ascending))

    def test_sort_by_version(self, executor):
        f = Filter.create_for_all_qualifiers().set_sorted_by_version()
        assert executor.execute(f).snapshot_ids() == [2, 4, 3]

    def test_sort_value_is_returned(self, executor):
        f = Filter.create_for_all_qualifiers().set_sorted_by_name()
        result = executor.execute(f)

        first = result.get_rows()[0]
        assert result.get_sort_value(first) == "Apache Struts"
        assert result.get_project_id(first) == 1
        assert result.get_root_project_id(first) == 1

    @pytest.mark.parametrize("pattern", ["*:org.sonar.*", "*:ORG.SonAR.*"])
    def test_filter_on_key_pattern_is_case_insensitive(self, executor, pattern):
        f = Filter.create_for_all_qualifiers().set_key_regexp(pattern)
        assert _ids(executor.execute(f)) == {4}

    @pytest.mark.parametrize("pattern", ["*struts*", "*STRUTS*"])
    def test_filter_on_name_pattern_is_case_insensitive(self, executor, pattern):
        f = Filter.create_for_all_qualifiers().set_name_regexp(pattern)
        assert _ids(executor.execute(f)) == {2, 4}

    def test_result_to_dataframe(self, executor):
        f = Filter.create_for_all_qualifiers().set_sorted_by_key()
        df = executor.execute(f).to_dataframe()

        assert list(df.columns) == ["snapshot_id", "project_id", "root_project_id", "sort_value"]
        assert df["snapshot_id"].tolist() == [3, 2, 4]


class TestMeasuresDataset:
    """Measure criteria and sorting on measures of classes."""

    @pytest.fixture
    def executor(self, make_executor):
        return make_executor("measures")

    @pytest.fixture
    def classes(self):
        return Filter().set_qualifiers({Qualifier.CLASS})

    def test_sort_by_metric(self, executor, classes):
        classes.set_sorted_metric_id(COVERAGE)
        assert executor.execute(classes).snapshot_ids() == [6, 5]

        classes.set_ascending_sort(False)
        assert executor.execute(classes).snapshot_ids() == [5, 6]

    def test_sort_value_is_the_measure(self, executor, classes):
        result = executor.execute(classes.set_sorted_metric_id(COVERAGE))
        assert [result.get_sort_value(row) for row in result] == [30.0, 85.3]

    def test_filter_on_one_measure(self, executor, classes):
        classes.add_measure_criterion(MeasureCriterion(COVERAGE, ">", 50.0))
        assert _ids(executor.execute(classes)) == {5}

    def test_measure_criteria_compose_as_intersection(self, executor, classes):
        classes.add_measure_criterion(MeasureCriterion(COVERAGE, ">", 50.0))
        classes.add_measure_criterion(MeasureCriterion(LINES, ">", 100.0))
        assert _ids(executor.execute(classes)) == {5}

    def test_measure_criteria_with_no_match(self, executor, classes):
        classes.add_measure_criterion(MeasureCriterion(COVERAGE, ">", 50.0))
        classes.add_measure_criterion(MeasureCriterion(LINES, "<", 100.0))
        assert executor.execute(classes).size() == 0

    def test_measure_criteria_and_sort(self, executor, classes):
        classes.add_measure_criterion(MeasureCriterion(COVERAGE, ">", 5.0))
        classes.add_measure_criterion(MeasureCriterion(LINES, ">", 5.0))
        classes.set_sorted_metric_id(COVERAGE)
        assert executor.execute(classes).snapshot_ids() == [6, 5]

        classes.set_ascending_sort(False)
        assert executor.execute(classes).snapshot_ids() == [5, 6]

    def test_missing_measure_is_excluded_from_criterion(self, executor, classes):
        classes.add_measure_criterion(MeasureCriterion(DUPLICATED_LINES, ">", 0.0))
        assert _ids(executor.execute(classes)) == {6}

    def test_missing_measure_on_other_metric(self, executor, classes):
        classes.add_measure_criterion(MeasureCriterion(LINES, ">", 0.0))
        classes.add_measure_criterion(MeasureCriterion(DUPLICATED_LINES, ">", 0.0))
        assert _ids(executor.execute(classes)) == {6}

    @pytest.mark.parametrize("ascending", [True, False])
    def test_missing_measure_is_sorted_last(self, executor, classes, ascending):
        classes.set_sorted_metric_id(DUPLICATED_LINES).set_ascending_sort(ascending)
        result = executor.execute(classes)

        assert result.snapshot_ids() == [6, 5]
        assert result.get_sort_value(result.get_rows()[1]) is None

    def test_criterion_and_sort_on_different_metrics(self, executor, classes):
        classes.add_measure_criterion(MeasureCriterion(LINES, ">", 0.0))
        classes.set_sorted_metric_id(COVERAGE)
        assert executor.execute(classes).snapshot_ids() == [6, 5]

    def test_criteria_on_same_metric_form_a_range(self, executor, classes):
        classes.add_measure_criterion(MeasureCriterion(LINES, ">", 400.0))
        classes.add_measure_criterion(MeasureCriterion(LINES, "<", 600.0))
        assert _ids(executor.execute(classes)) == {5}

    def test_criterion_on_variation_uses_period(self, executor, classes):
        classes.add_measure_criterion(MeasureCriterion(COVERAGE, ">", 0.0, variation=True))
        assert _ids(executor.execute(classes)) == {5}

        classes.set_period_index(2)
        assert _ids(executor.execute(classes)) == {6}

    def test_sort_on_variation(self, executor, classes):
        classes.set_sorted_metric_id(COVERAGE, on_variation=True)
        assert executor.execute(classes).snapshot_ids() == [6, 5]

    def test_measures_of_old_snapshots_are_ignored(self, executor, classes):
        classes.add_measure_criterion(MeasureCriterion(COVERAGE, "<", 20.0))
        assert executor.execute(classes).size() == 0


class TestViewsDataset:
    """Project copies materialized under views."""

    @pytest.fixture
    def executor(self, make_executor):
        return make_executor("views")

    def test_project_copies_are_excluded_from_plain_queries(self, executor):
        f = Filter().set_qualifiers({Qualifier.PROJECT})
        assert _ids(executor.execute(f)) == {1}

    def test_direct_children_of_a_view_include_copies(self, executor):
        f = Filter().set_qualifiers({Qualifier.SUBVIEW, Qualifier.PROJECT}).set_path(2, 2, "")
        assert _ids(executor.execute(f)) == {3, 4}

    def test_descendants_of_a_view_include_copies(self, executor):
        f = Filter().set_qualifiers({Qualifier.SUBVIEW, Qualifier.PROJECT}).set_path(2, 0, "2.")
        assert _ids(executor.execute(f)) == {3, 4, 5}

    def test_copies_need_view_qualifiers(self, executor):
        f = Filter().set_qualifiers({Qualifier.PROJECT}).set_path(2, 0, "2.")
        assert executor.execute(f).size() == 0

    def test_underscore_in_key_pattern_matches_itself(self, executor):
        f = Filter().set_qualifiers({Qualifier.VIEW, Qualifier.SUBVIEW}).set_key_regexp("all_projects*")
        assert _ids(executor.execute(f)) == {2, 3}

        f.set_key_regexp("all_projects_*")
        assert executor.execute(f).size() == 0
