import heftsched.schedulers as sch
import heftsched.utils.gantt as gantt


def test_assign_lanes_never_overlaps():
    events = [
        sch.ScheduleEvent(task="a", start=0, end=50),
        sch.ScheduleEvent(task="b", start=0, end=30),
        sch.ScheduleEvent(task="c", start=30, end=40),
        sch.ScheduleEvent(task="d", start=50, end=60),
    ]

    lanes = gantt.assign_lanes(events)

    assert [[e.task for e in lane] for lane in lanes] == [
        ["b", "c", "d"],
        ["a"],
    ]


def test_save_gantt_chart(tmp_path):
    schedule = {
        "x": [sch.ScheduleEvent(task="a", start=0, end=10)],
        "y": [],
    }
    filename = tmp_path / "chart.png"

    gantt.save_gantt_chart(schedule, str(filename), title="test")

    assert filename.exists()
    assert filename.stat().st_size > 0
