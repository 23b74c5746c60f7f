import argparse
import sys
import typing as tp

from loguru import logger

import heftsched as hs
import heftsched.catalogs as cts
import heftsched.schedulers as sch
import heftsched.utils.gantt as gantt
import heftsched.workflows as wfs
import scheduling.config as config


def _init_logger(verbose: bool = False) -> None:
    iter_num = config.ITER_NUMBER

    logger.remove()

    logger.add(
        sink=sys.stdout,
        level="DEBUG" if verbose else "INFO",
    )

    logger.add(
        sink=hs.LOGS_DIR + "/info/info-{:03d}.txt".format(iter_num),
        level="INFO",
        rotation="50MB",
    )

    logger.add(
        sink=hs.LOGS_DIR + "/debug/debug-{:03d}.txt".format(iter_num),
        level="DEBUG",
        rotation="50MB",
    )


def parse_args(argv: tp.Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Map workflow tasks to sites with HEFT",
    )
    parser.add_argument("workflow", nargs="?", default=config.WORKFLOW_TRACE,
                        help="workflow trace in wfcommons json format")
    parser.add_argument("--tc", default=config.TRANSFORMATION_CATALOG,
                        help="transformation catalog (json)")
    parser.add_argument("--sc", default=config.SITE_CATALOG,
                        help="site catalog (json)")
    parser.add_argument("--sites", nargs="+", default=config.SITES,
                        help="sites where workflow can run")
    parser.add_argument("--workers", type=int, default=config.WORKERS,
                        help="threads for evaluating candidate sites")
    parser.add_argument("--gantt", default=None,
                        help="save gantt chart of schedule to this file")
    parser.add_argument("--no-log-files", action="store_true",
                        help="log to stdout only")
    parser.add_argument("-v", "--verbose", action="store_true")

    return parser.parse_args(argv)


def main(argv: tp.Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    if args.no_log_files:
        logger.remove()
        logger.add(sink=sys.stdout, level="DEBUG" if args.verbose else "INFO")
    else:
        _init_logger(verbose=args.verbose)

    workflow = wfs.PegasusTraceParser(filename=args.workflow).get_workflow()
    catalog = cts.TransformationCatalog.from_json(args.tc)

    scheduler = sch.HeftScheduler(
        sites=args.sites,
        site_lookup=catalog,
        runtime_lookup=catalog,
        capacity_provider=cts.SiteCatalog.from_json(args.sc),
        settings=sch.Settings(workers=args.workers),
    )
    collector = hs.MetricCollector()
    scheduler.set_metric_collector(collector=collector)

    try:
        scheduler.schedule(workflow)
    except hs.HeftError as e:
        logger.error(f"Scheduling of {workflow.name} failed: {e}")
        return 1

    for node in workflow:
        annotation = node.annotation
        logger.info(
            f"Task = {node.id}\n"
            f"Site = {annotation.scheduled_site}\n"
            f"Start = {annotation.actual_start}\n"
            f"Finish = {annotation.actual_finish}\n"
            f"Downward rank = {annotation.downward_rank}\n"
        )

    logger.opt(raw=True).info("=" * 79 + "\n")

    for site in scheduler.registry:
        stats = collector.sites[site.name]
        logger.info(
            f"Site = {site.name}\n"
            f"Processors = {site.capacity}\n"
            f"Scheduled tasks = {stats.scheduled_tasks}\n"
            f"Busy time = {stats.busy_time}\n"
            f"Utilization = "
            f"{collector.utilization(site.name, site.capacity):.2f}\n"
        )

    logger.info(
        f"Scheduler = {scheduler.description()}\n"
        f"Workflow = {workflow.name}\n"
        f"Ranked tasks = {collector.ranked_tasks}\n"
        f"Scheduled tasks = {collector.scheduled_tasks}\n"
        f"Makespan = {collector.makespan}\n"
    )

    if args.gantt is not None:
        gantt.save_gantt_chart(
            schedule=scheduler.get_schedule(),
            filename=args.gantt,
            title=f"{workflow.name} (makespan {collector.makespan})",
        )
        logger.info(f"Saved gantt chart to {args.gantt}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
