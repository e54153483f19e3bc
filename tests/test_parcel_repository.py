import pytest

from parceltrack.core.constants import ParcelStatus
from parceltrack.core.exceptions import InvalidStateError, NotFoundError, StoreError
from parceltrack.database.session import drop_all_tables


def test_add_get_delete(repo, db, make_parcel):
    parcel = make_parcel()

    number = repo.add(parcel)
    assert number > 0

    db.expunge_all()
    stored = repo.get(number)
    assert stored.number == number
    assert stored.to_dict(exclude={"number"}) == parcel.to_dict(exclude={"number"})

    repo.delete(number)

    with pytest.raises(NotFoundError):
        repo.get(number)


def test_add_leaves_template_untouched(repo, make_parcel):
    parcel = make_parcel()

    first = repo.add(parcel)
    second = repo.add(parcel)

    assert first != second
    assert parcel.number is None


def test_get_unknown_number(repo):
    with pytest.raises(NotFoundError) as excinfo:
        repo.get(404)
    assert excinfo.value.number == 404
    assert isinstance(excinfo.value, LookupError)


def test_set_address(repo, db, make_parcel):
    number = repo.add(make_parcel())

    repo.set_address(number, "new test address")

    db.expire_all()
    assert repo.get(number).address == "new test address"


def test_set_status(repo, db, make_parcel):
    number = repo.add(make_parcel())

    repo.set_status(number, ParcelStatus.SENT)

    db.expire_all()
    assert repo.get(number).status == "sent"


def test_set_status_accepts_any_value_and_regressions(repo, db, make_parcel):
    number = repo.add(make_parcel())

    repo.set_status(number, ParcelStatus.DELIVERED)
    repo.set_status(number, "lost")
    repo.set_status(number, ParcelStatus.REGISTERED)

    db.expire_all()
    assert repo.get(number).status == "registered"


def test_set_status_unknown_number(repo):
    with pytest.raises(NotFoundError):
        repo.set_status(404, ParcelStatus.SENT)


def test_get_by_client(repo, rng, make_parcel):
    client = rng.randint(1, 10_000_000)
    expected = {}
    for _ in range(3):
        parcel = make_parcel(client=client, address=f"street {rng.randint(1, 300)}")
        number = repo.add(parcel)
        expected[number] = parcel.to_dict(exclude={"number"})
    repo.add(make_parcel(client=client + 1))

    stored = repo.get_by_client(client)

    assert len(stored) == len(expected)
    for parcel in stored:
        assert parcel.number in expected
        assert parcel.to_dict(exclude={"number"}) == expected[parcel.number]


def test_get_by_client_without_parcels(repo):
    assert repo.get_by_client(42) == []


def test_set_address_after_sent_is_rejected(repo, db, make_parcel):
    number = repo.add(make_parcel(address="original address"))
    repo.set_status(number, "sent")

    with pytest.raises(InvalidStateError) as excinfo:
        repo.set_address(number, "new address")

    assert excinfo.value.status == "sent"
    db.expire_all()
    assert repo.get(number).address == "original address"


def test_set_address_unknown_number(repo):
    with pytest.raises(NotFoundError):
        repo.set_address(404, "nowhere")


@pytest.mark.parametrize("status", [ParcelStatus.SENT, ParcelStatus.DELIVERED, "lost"])
def test_delete_outside_registered_is_rejected(repo, db, make_parcel, status):
    number = repo.add(make_parcel())
    repo.set_status(number, status)

    with pytest.raises(InvalidStateError):
        repo.delete(number)

    db.expire_all()
    parcel = repo.get(number)
    assert parcel.status == (status.value if isinstance(status, ParcelStatus) else status)
    assert parcel.address == "test"


def test_delete_twice(repo, make_parcel):
    number = repo.add(make_parcel())

    repo.delete(number)

    with pytest.raises(NotFoundError):
        repo.delete(number)


def test_delete_keeps_other_parcels(repo, make_parcel):
    kept = repo.add(make_parcel())
    removed = repo.add(make_parcel())

    repo.delete(removed)

    assert repo.get(kept).number == kept
    assert [p.number for p in repo.get_by_client(1000)] == [kept]


def test_numbers_are_not_reused_after_delete(repo, make_parcel):
    first = repo.add(make_parcel())
    repo.delete(first)

    assert repo.add(make_parcel()) > first


def test_read_failure_is_store_error(repo, engine):
    drop_all_tables(engine)

    with pytest.raises(StoreError) as excinfo:
        repo.get(1)
    assert excinfo.value.__cause__ is not None


def test_write_failure_is_store_error(repo, db, engine, make_parcel):
    drop_all_tables(engine)

    with pytest.raises(StoreError):
        repo.add(make_parcel())
    db.rollback()

    with pytest.raises(StoreError):
        repo.set_status(1, ParcelStatus.SENT)


def test_guarded_writes_and_listing_failures_are_store_errors(repo, db, engine, make_parcel):
    number = repo.add(make_parcel())
    db.commit()
    drop_all_tables(engine)

    with pytest.raises(StoreError) as excinfo:
        repo.set_address(number, "new address")
    assert excinfo.value.number == number
    db.rollback()

    with pytest.raises(StoreError):
        repo.delete(number)
    db.rollback()

    with pytest.raises(StoreError):
        repo.get_by_client(1000)


def test_add_without_address_is_rejected_by_store(repo, db, make_parcel):
    with pytest.raises(StoreError):
        repo.add(make_parcel(address=None))
    db.rollback()

    assert repo.get_by_client(1000) == []
