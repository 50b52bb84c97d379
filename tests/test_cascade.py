"""Cascade orchestrator tests."""

import logging

import pytest

from garagelog.errors import NotFound, StorageFailure, Unauthorized
from garagelog.repositories import (
    AlertRepository,
    JobLabelRepository,
    JobRepository,
    LabelRepository,
    TaskRepository,
    UserRepository,
    VehicleRepository,
)
from garagelog.services.cascade import CascadeOrchestrator


@pytest.fixture
def garage(db):
    """A user with one vehicle, one job on it, two tasks, an alert and a label."""
    owner = UserRepository(db).create(username="owner")
    vehicle = VehicleRepository(db).create(name="Truck", user_id=owner)
    job = JobRepository(db).create(name="Brakes", vehicle_id=vehicle, user_id=owner)
    tasks = [
        TaskRepository(db).create(name="Pull wheels", job_id=job),
        TaskRepository(db).create(name="Swap pads", job_id=job),
    ]
    alert = AlertRepository(db).create(name="Pads ordered", user_id=owner, job_id=job)
    label = LabelRepository(db).create(name="Safety", user_id=owner)
    JobLabelRepository(db).assign(job, label)
    return {
        "owner": owner,
        "vehicle": vehicle,
        "job": job,
        "tasks": tasks,
        "alert": alert,
        "label": label,
    }


def test_delete_vehicle_removes_everything_below_it(db, garage):
    CascadeOrchestrator(db).delete_vehicle(garage["vehicle"], garage["owner"])

    with pytest.raises(NotFound):
        VehicleRepository(db).get_by_id(garage["vehicle"])
    with pytest.raises(NotFound):
        JobRepository(db).get_by_id(garage["job"])
    assert TaskRepository(db).list(job_id=garage["job"]) == []
    assert AlertRepository(db).list(job_id=garage["job"]) == []
    assert JobLabelRepository(db).list(job_id=garage["job"]) == []
    # Labels are not owned by jobs
    assert LabelRepository(db).get_by_id(garage["label"]).name == "Safety"


def test_delete_vehicle_keeps_other_vehicles_jobs(db, garage):
    other_vehicle = VehicleRepository(db).create(name="Car", user_id=garage["owner"])
    other_job = JobRepository(db).create(
        name="Oil", vehicle_id=other_vehicle, user_id=garage["owner"]
    )

    CascadeOrchestrator(db).delete_vehicle(garage["vehicle"])

    assert JobRepository(db).get_by_id(other_job).name == "Oil"


def test_delete_job_keeps_label(db, garage):
    CascadeOrchestrator(db).delete_job(garage["job"], garage["owner"])

    assert TaskRepository(db).list(job_id=garage["job"]) == []
    with pytest.raises(NotFound):
        AlertRepository(db).get_by_id(garage["alert"])
    assert JobLabelRepository(db).list(label_id=garage["label"]) == []
    assert LabelRepository(db).get_by_id(garage["label"]).name == "Safety"
    assert VehicleRepository(db).get_by_id(garage["vehicle"]).name == "Truck"


def test_delete_label_keeps_job(db, garage):
    CascadeOrchestrator(db).delete_label(garage["label"], garage["owner"])

    with pytest.raises(NotFound):
        LabelRepository(db).get_by_id(garage["label"])
    assert JobLabelRepository(db).list(job_id=garage["job"]) == []
    assert JobRepository(db).get_by_id(garage["job"]).name == "Brakes"
    assert len(TaskRepository(db).list(job_id=garage["job"])) == 2


def test_non_owner_cannot_trigger_cleanup(db, garage):
    stranger = UserRepository(db).create(username="stranger")

    with pytest.raises(Unauthorized):
        CascadeOrchestrator(db).delete_vehicle(garage["vehicle"], stranger)

    # Nothing was touched
    assert JobRepository(db).get_by_id(garage["job"]).name == "Brakes"
    assert len(TaskRepository(db).list(job_id=garage["job"])) == 2
    assert len(JobLabelRepository(db).list(job_id=garage["job"])) == 1


def test_missing_root_raises_not_found(db):
    with pytest.raises(NotFound):
        CascadeOrchestrator(db).delete_job(9999)


def test_dependent_failures_are_logged_and_skipped(db, garage, monkeypatch, caplog):
    cascade = CascadeOrchestrator(db)

    def broken_delete(entity_id, owner_id=None):
        raise StorageFailure("Unable to write task")

    monkeypatch.setattr(cascade.tasks, "delete", broken_delete)

    with caplog.at_level(logging.WARNING, logger="garagelog.services.cascade"):
        cascade.delete_job(garage["job"])

    assert "Could not delete task" in caplog.text
    with pytest.raises(NotFound):
        JobRepository(db).get_by_id(garage["job"])
    # Alerts and label assignments were still cleaned up
    assert AlertRepository(db).list(job_id=garage["job"]) == []
    assert JobLabelRepository(db).list(job_id=garage["job"]) == []


def test_root_failure_propagates(db, garage, monkeypatch):
    cascade = CascadeOrchestrator(db)

    def broken_delete(entity_id, owner_id=None):
        raise StorageFailure("Unable to write job")

    monkeypatch.setattr(cascade.jobs, "delete", broken_delete)

    with pytest.raises(StorageFailure):
        cascade.delete_job(garage["job"])


def test_delete_job_repeated_from(db, garage):
    """A job named as another job's origin can still be deleted."""
    repeat = JobRepository(db).create(
        name="Brakes again", origin_job_id=garage["job"], user_id=garage["owner"]
    )

    CascadeOrchestrator(db).delete_job(garage["job"], garage["owner"])

    with pytest.raises(NotFound):
        JobRepository(db).get_by_id(garage["job"])
    assert JobRepository(db).get_by_id(repeat).origin_job_id == garage["job"]


def test_delete_vehicle_with_direct_alert(db, garage):
    """Alerts pointing at a vehicle but no job do not block the vehicle delete."""
    alert = AlertRepository(db).create(
        name="Registration due", user_id=garage["owner"], vehicle_id=garage["vehicle"]
    )

    CascadeOrchestrator(db).delete_vehicle(garage["vehicle"], garage["owner"])

    with pytest.raises(NotFound):
        VehicleRepository(db).get_by_id(garage["vehicle"])
    assert AlertRepository(db).get_by_id(alert).vehicle_id == garage["vehicle"]
