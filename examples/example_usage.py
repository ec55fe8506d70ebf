"""Example: drive the TOIL service layer directly (no Flask).

Controllers stay thin; the business rules live in ToilService.
"""

from datetime import date, datetime

from src.toil_system.toil_system.container import build_container


def main():
    container = build_container(backend="memory")

    # Saturday shift, 09:00-15:00: weekend work counts in full.
    interval_id = container.attendance_repo.add_interval(
        employee_id=1,
        work_date=date(2026, 2, 7),
        check_in_time=datetime(2026, 2, 7, 9, 0),
        check_out_time=datetime(2026, 2, 7, 15, 0),
    )
    entry = container.toil_service.process_attendance_for_toil(interval_id)
    print(entry.to_dict())

    print(container.toil_service.get_user_toil_balance(1, now=datetime(2026, 2, 20)).to_dict())
    print(container.toil_service.use_toil_hours(1, "2.5").to_dict())


if __name__ == "__main__":
    main()
