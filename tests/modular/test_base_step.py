import pytest

from modular.base_step import BaseStep, ProvisionReport, StepOutcome, StepStatus


class _Step(BaseStep):
    name = "dummy"

    def __init__(self, app_settings, logger=None, enabled=True, satisfied=False, result=None):
        super().__init__(app_settings, logger)
        self.enabled = enabled
        self.satisfied = satisfied
        self.result = result
        self.applied = 0

    def is_enabled(self):
        return self.enabled

    def is_satisfied(self):
        return self.satisfied

    def apply(self):
        self.applied += 1
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def test_run_applies_unsatisfied_step(app_settings, mock_logger):
    step = _Step(app_settings, mock_logger)

    outcome = step.run()

    assert outcome == StepOutcome("dummy", StepStatus.APPLIED)
    assert step.applied == 1


def test_run_skips_satisfied_step(app_settings, mock_logger):
    step = _Step(app_settings, mock_logger, satisfied=True)

    assert step.run().status is StepStatus.SKIPPED
    assert step.applied == 0


def test_run_does_not_check_disabled_step(app_settings, mock_logger):
    step = _Step(app_settings, mock_logger, enabled=False)
    step.is_satisfied = lambda: pytest.fail("disabled steps are not checked")

    assert step.run().status is StepStatus.DISABLED


def test_run_false_result_is_failure(app_settings, mock_logger):
    outcome = _Step(app_settings, mock_logger, result=False).run()

    assert outcome.status is StepStatus.FAILED


def test_run_propagates_exceptions(app_settings, mock_logger):
    step = _Step(app_settings, mock_logger, result=RuntimeError("boom"))

    with pytest.raises(RuntimeError, match="boom"):
        step.run()


def test_get_description_falls_back_to_name(app_settings):
    step = _Step(app_settings)
    step.metadata = {"description": ""}

    assert step.get_description() == "dummy"


def test_provision_report():
    report = ProvisionReport(
        [
            StepOutcome("start_services", StepStatus.SKIPPED),
            StepOutcome("wordpress", StepStatus.APPLIED),
            StepOutcome("phpmyadmin", StepStatus.FAILED, "download failed"),
        ]
    )

    assert report.succeeded is False
    assert report.failed_step == "phpmyadmin"
    assert report.status_of("wordpress") is StepStatus.APPLIED
    assert report.status_of("restart_services") is None
    assert report.names_with_status(StepStatus.SKIPPED) == ["start_services"]
    assert ProvisionReport([]).succeeded is True
