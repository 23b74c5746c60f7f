"""Gantt chart of a finished schedule. One row per processor lane of
every site.
"""

import itertools
import typing as tp

import matplotlib.colors as mcolors
import matplotlib.pyplot as plt

import heftsched.schedulers as sch


def assign_lanes(
        events: list[sch.ScheduleEvent],
) -> list[list[sch.ScheduleEvent]]:
    """Spread jobs of a site over lanes, so that jobs in a lane never
    overlap. Jobs are placed in the first lane that is free at their
    start.

    :param events: jobs of a site.
    :return: list of lanes.
    """

    lanes: list[list[sch.ScheduleEvent]] = []

    for event in sorted(events, key=lambda e: (e.start, e.end)):
        for lane in lanes:
            if lane[-1].end <= event.start:
                lane.append(event)
                break
        else:
            lanes.append([event])

    return lanes


def gantt_chart(
        schedule: dict[str, list[sch.ScheduleEvent]],
        title: tp.Optional[str] = None,
) -> plt.Figure:
    rows: list[tp.Tuple[str, list[sch.ScheduleEvent]]] = []
    for site, events in schedule.items():
        for ind, lane in enumerate(assign_lanes(events)):
            rows.append((f"{site}:{ind}", lane))

    col = itertools.cycle(mcolors.TABLEAU_COLORS)

    fig = plt.figure(figsize=(15, max(2, len(rows) * 0.5 + 1)))
    ax = fig.add_subplot(111)

    for idx, (_, lane) in enumerate(rows):
        for event in lane:
            ax.barh(idx, event.end - event.start, left=event.start,
                    height=0.6, align="center", edgecolor="black",
                    color=next(col), alpha=0.95)
            ax.text(event.start, idx, event.task, va="center", fontsize=8)

    ax.set_yticks(range(len(rows)))
    ax.set_yticklabels([label for label, _ in rows])
    ax.set_ylabel("Site processor")
    ax.set_xlabel("Time (s)")
    ax.grid(color="g", linestyle=":", alpha=0.5)

    if title is not None:
        ax.set_title(title)

    return fig


def save_gantt_chart(
        schedule: dict[str, list[sch.ScheduleEvent]],
        filename: str,
        title: tp.Optional[str] = None,
) -> None:
    fig = gantt_chart(schedule=schedule, title=title)
    fig.savefig(filename)
    plt.close(fig)
