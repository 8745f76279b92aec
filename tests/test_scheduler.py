from core.scheduler import Scheduler, WEATHER_REFRESH_JOB


async def test_refresh_weather_upserts_all_cities(weather_service, fake_repo):
    scheduler = Scheduler(weather_service, refresh_minutes=5)

    count = await scheduler.refresh_weather()

    assert count == 10
    assert len(fake_repo.upserts) == 10


async def test_refresh_weather_swallows_errors(weather_service):
    async def broken(**kwargs):
        raise RuntimeError("backend down")

    weather_service.get_weather = broken
    scheduler = Scheduler(weather_service)

    assert await scheduler.refresh_weather() == 0


async def test_start_registers_refresh_job(weather_service):
    scheduler = Scheduler(weather_service, refresh_minutes=7)
    scheduler.start()
    try:
        assert scheduler.get_next_run_time(WEATHER_REFRESH_JOB) is not None
        assert scheduler.get_next_run_time("missing") is None
    finally:
        scheduler.shutdown()
