import pytest

from routine_api.app.core.config import IDENTITY_REFERENCE
from routine_api.app.core.deps import build_services
from routine_api.app.core.errors import NotFoundError, ValidationError
from routine_api.app.schemas.tag import TagCreate
from routine_api.app.schemas.task import TaskCreate, TaskStatus, TaskUpdate
from routine_api.app.schemas.user import ProfileUpdate


@pytest.mark.asyncio
async def test_create_task_with_defaults(services, make_user):
    owner = await make_user()
    task = await services.tasks.create_task(owner.id)
    assert task.name == "Untitled"
    assert task.status == TaskStatus.START
    assert task.owner.id == owner.id
    assert task.owner.email == "jane@example.com"
    assert len(task.description) == 1
    assert task.description[0].type == "paragraph"
    assert task.description[0].data == {"text": ""}


@pytest.mark.asyncio
async def test_create_task_copies_tags_and_assignees(services, make_user):
    owner = await make_user()
    bob = await make_user(name="Bob", email="bob@example.com")
    await services.tags.create_tag(owner.id, TagCreate(id="t1", name="urgent", color="#f00"))

    task = await services.tasks.create_task(
        owner.id, TaskCreate(name="Write report", tags=["t1"], assigned_users=[bob.id])
    )
    assert [t.name for t in task.tags] == ["urgent"]
    assert [u.name for u in task.assigned_users] == ["Bob"]


@pytest.mark.asyncio
async def test_create_task_rejects_unknown_references(services, make_user):
    owner = await make_user()
    with pytest.raises(ValidationError):
        await services.tasks.create_task(owner.id, TaskCreate(tags=["nope"]))
    with pytest.raises(NotFoundError):
        await services.tasks.create_task(owner.id, TaskCreate(assigned_users=["ghost"]))


@pytest.mark.asyncio
async def test_tasks_visible_to_owner_and_assignees(services, make_user):
    owner = await make_user()
    bob = await make_user(name="Bob", email="bob@example.com")
    carol = await make_user(name="Carol", email="carol@example.com")

    first = await services.tasks.create_task(owner.id, TaskCreate(name="first"))
    second = await services.tasks.create_task(owner.id, TaskCreate(name="second", assigned_users=[bob.id]))

    assert [t.id for t in await services.tasks.list_tasks(owner.id)] == [second.id, first.id]
    assert [t.id for t in await services.tasks.list_tasks(bob.id)] == [second.id]
    assert await services.tasks.list_tasks(carol.id) == []


@pytest.mark.asyncio
async def test_snapshots_are_not_refreshed(services, make_user):
    owner = await make_user()
    task = await services.tasks.create_task(owner.id)
    await services.users.update_profile(owner.id, ProfileUpdate(name="Renamed"))

    fetched = await services.tasks.get_task(task.id)
    assert fetched.owner.name == "Jane Doe"


@pytest.mark.asyncio
async def test_reference_mode_reads_live_users(settings, store, mailer, assets, make_user):
    settings.identity_mode = IDENTITY_REFERENCE
    live = build_services(settings, store, mailer=mailer, assets=assets)
    owner = await make_user()
    task = await live.tasks.create_task(owner.id)
    await live.users.update_profile(owner.id, ProfileUpdate(name="Renamed"))

    fetched = await live.tasks.get_task(task.id)
    assert fetched.owner.name == "Renamed"


@pytest.mark.asyncio
async def test_update_task_merges_fields(services, make_user):
    owner = await make_user()
    bob = await make_user(name="Bob", email="bob@example.com")
    task = await services.tasks.create_task(owner.id, TaskCreate(name="draft", assigned_users=[bob.id]))

    updated = await services.tasks.update_task(task.id, TaskUpdate(name="", status=TaskStatus.DONE))
    assert updated.name == "draft"
    assert updated.status == TaskStatus.DONE
    assert [u.id for u in updated.assigned_users] == [bob.id]

    updated = await services.tasks.update_task(task.id, TaskUpdate(assigned_users=[]))
    assert updated.assigned_users == []


@pytest.mark.asyncio
async def test_empty_status_resets_to_start(services, make_user):
    owner = await make_user()
    task = await services.tasks.create_task(owner.id, TaskCreate(status=TaskStatus.ON_HOLD))

    kept = await services.tasks.update_task(task.id, TaskUpdate(name="renamed"))
    assert kept.status == TaskStatus.ON_HOLD

    reset = await services.tasks.update_task(task.id, TaskUpdate.model_validate({"status": ""}))
    assert reset.status == TaskStatus.START


@pytest.mark.asyncio
async def test_delete_task(services, make_user):
    owner = await make_user()
    task = await services.tasks.create_task(owner.id)
    result = await services.tasks.delete_task(task.id)
    assert result.message == "Task deleted successfully"
    with pytest.raises(NotFoundError):
        await services.tasks.get_task(task.id)
    with pytest.raises(NotFoundError):
        await services.tasks.delete_task(task.id)
