"""
gridexport/cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    gridexport --version
    gridexport export --layout layout.yaml --input records.jsonl -o out.xlsx
    cat records.json | gridexport export --layout layout.yaml -o out.xlsx
    gridexport export --layout layout.yaml --input records.json -o - > out.xlsx

종료 코드:
    0: 성공
    1: 레이아웃/입력/출력 오류 (GridExportError)
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from gridexport.config import configure_logging, get_version, settings
from gridexport.exceptions import GridExportError, OutputExistsError

from .ui.console import install_rich_logging, print_error, print_success, print_warning

logger = logging.getLogger(__name__)

VERSION = get_version()


@click.group()
@click.version_option(VERSION, prog_name="gridexport")
def cli() -> None:
    """레코드 스트림을 서식 있는 xlsx 시트로 내보냅니다."""


@cli.command("export")
@click.option(
    "-l",
    "--layout",
    "layout_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML 레이아웃 파일",
)
@click.option("-i", "--input", "input_path", default="-", show_default=True, help="레코드 파일 (JSON/JSONL, - 는 표준 입력)")
@click.option(
    "--input-format",
    type=click.Choice(["auto", "json", "jsonl"]),
    default="auto",
    show_default=True,
    help="입력 형식",
)
@click.option("-o", "--output", default=None, help="출력 파일 경로 (- 는 표준 출력)")
@click.option("-f", "--force", "--override", "force", is_flag=True, help="기존 파일 덮어쓰기")
@click.option("--sheet", default=None, help="시트 이름 (레이아웃 파일의 sheet 보다 우선)")
@click.option("-q", "--quiet", is_flag=True, help="최소 출력 모드")
@click.option("-v", "--verbose", is_flag=True, help="상세 로그 출력")
def export_cmd(
    layout_path: str,
    input_path: str,
    input_format: str,
    output: Optional[str],
    force: bool,
    sheet: Optional[str],
    quiet: bool,
    verbose: bool,
) -> None:
    """레코드를 레이아웃에 따라 xlsx 로 내보내기"""
    from gridexport.export.layout_file import load_layout
    from gridexport.export.sheet import create_writer
    from gridexport.io.excel import ExcelDocument
    from gridexport.io.records import read_records

    from .ui.progress import export_progress

    configure_logging()
    if verbose:
        install_rich_logging(logging.DEBUG)

    output = output or settings.DEFAULT_OUTPUT_FILE
    overwrite = force or settings.OVERWRITE_OUTPUT
    to_stdout = output == "-"

    try:
        sheet_name, layout = load_layout(layout_path, default_sheet=settings.DEFAULT_SHEET_NAME)
        sheet_name = sheet or sheet_name

        # 레코드를 읽기 전에 덮어쓰기 여부를 먼저 확인
        if not to_stdout and not overwrite:
            if Path(output).exists():
                raise OutputExistsError(Path(output))

        stream = read_records(input_path, input_format)
        document = ExcelDocument()
        writer = create_writer(document, sheet_name, document.styles, layout)

        with export_progress(sheet_name, total=stream.estimated_size, disable=quiet) as tracker:
            writer.export(tracker.track(stream), estimated_size=stream.estimated_size)

        if writer.written_item_count == 0 and not quiet:
            print_warning("기록된 레코드가 없습니다 (헤더만 저장)")

        if to_stdout:
            document.write_to(sys.stdout.buffer)
            sys.stdout.buffer.flush()
        else:
            saved = document.save(output, overwrite=overwrite)
            if not quiet:
                print_success(f"{writer.written_item_count}건 -> {saved} ({sheet_name})")
    except GridExportError as e:
        logger.debug("내보내기 실패", exc_info=True)
        print_error(str(e))
        raise SystemExit(1) from e


def main() -> None:
    """Entry point for the gridexport CLI."""
    cli()


if __name__ == "__main__":
    main()
