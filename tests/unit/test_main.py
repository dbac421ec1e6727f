from unittest.mock import MagicMock, patch

import pytest

from constructia import main as entrypoints
from constructia.config.settings import Settings
from constructia.lifecycle.exceptions import ExternalUploadError, SweepQueryError
from constructia.lifecycle.handoff import HandoffResult
from constructia.lifecycle.sweeper import SweepResult


@pytest.fixture()
def bootstrapped():
    """Skip pool setup and hand back default settings."""
    with (
        patch.object(entrypoints, "_bootstrap", return_value=Settings()) as bootstrap,
        patch.object(entrypoints, "close_pool") as close_pool,
    ):
        yield bootstrap, close_pool


class TestHandoffMain:
    def test_usage_error_without_document_id(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert entrypoints.handoff_main([]) == 2
        assert "usage: constructia-handoff" in capsys.readouterr().err

    def test_prints_external_id_on_success(
        self, bootstrapped, make_document, capsys: pytest.CaptureFixture[str]
    ) -> None:
        service = MagicMock()
        service.handoff.return_value = HandoffResult(
            document_id="doc-1", external_id="OBR_1", deletion_scheduled_at=MagicMock()
        )
        with (
            patch.object(entrypoints, "build_handoff_service", return_value=service),
            patch.object(entrypoints, "DocumentsRepository") as repo_cls,
        ):
            repo_cls.return_value.find_by_id.return_value = make_document(
                classification="DNI", classification_confidence=90
            )
            code = entrypoints.handoff_main(["doc-1"])

        assert code == 0
        assert "uploaded doc-1 as OBR_1" in capsys.readouterr().out
        service.handoff.assert_called_once_with(
            "doc-1", "client-1", "client-1/doc-1.pdf", "DNI", 90
        )
        bootstrapped[1].assert_called_once()

    def test_reports_failure(
        self, bootstrapped, make_document, capsys: pytest.CaptureFixture[str]
    ) -> None:
        service = MagicMock()
        service.handoff.side_effect = ExternalUploadError("Connection error with external platform")
        with (
            patch.object(entrypoints, "build_handoff_service", return_value=service),
            patch.object(entrypoints, "DocumentsRepository") as repo_cls,
        ):
            repo_cls.return_value.find_by_id.return_value = make_document()
            code = entrypoints.handoff_main(["doc-1"])

        assert code == 1
        assert "upload failed: Connection error" in capsys.readouterr().err
        bootstrapped[1].assert_called_once()


class TestSweepMain:
    def test_returns_zero_after_sweep(self, bootstrapped) -> None:
        sweeper = MagicMock()
        sweeper.sweep.return_value = SweepResult(deleted=2, errors=1)
        with patch.object(entrypoints, "build_sweeper", return_value=sweeper):
            assert entrypoints.sweep_main() == 0
        bootstrapped[1].assert_called_once()

    def test_returns_one_when_query_fails(self, bootstrapped) -> None:
        sweeper = MagicMock()
        sweeper.sweep.side_effect = SweepQueryError("relation documents does not exist")
        with patch.object(entrypoints, "build_sweeper", return_value=sweeper):
            assert entrypoints.sweep_main() == 1


class TestBuildWorker:
    def test_skips_classifier_when_disabled(self) -> None:
        settings = Settings(classification_enabled=False)
        with patch.object(entrypoints, "ClassifierFactory") as factory:
            worker = entrypoints.build_worker(settings)
        factory.create.assert_not_called()
        assert worker._runner._classifier is None

    def test_builds_classifier_when_enabled(self) -> None:
        with patch.object(entrypoints, "ClassifierFactory") as factory:
            worker = entrypoints.build_worker(Settings())
        assert worker._runner._classifier is factory.create.return_value
