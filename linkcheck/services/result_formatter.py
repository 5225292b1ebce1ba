from linkcheck.domain.result import Result
from linkcheck.domain.status import Status

STATUS_STYLES = {
    Status.UNVISITED: "default",
    Status.UP: "green",
    Status.DOWN: "bold red",
    Status.RATE_LIMITED: "bold yellow",
    Status.NON_STANDARD: "bold yellow",
}


def status_style(status: Status) -> str:
    return STATUS_STYLES.get(status, "default")


def format_result(result: Result) -> str:
    code = result.response_code if result.response_code is not None else 0
    return (
        f"URL: {result.url}\n"
        f"Status: {result.status.label}\n"
        f"Status Code: {code}\n"
        f"Problem: {result.problem or ''}\n"
        f"Referring URL: {result.referring_site}\n"
    )
