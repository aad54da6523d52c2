"""Serialization of test results to TRX and JUnit XML files."""

import logging
import platform
import xml.etree.ElementTree as ET
from pathlib import Path

import regex

from vhdl_test.models.result import TestResults

log = logging.getLogger(__name__)

TRX_NAMESPACE = "http://microsoft.com/schemas/VisualStudio/TeamTest/2010"
TRX_TEST_TYPE = "13CDC9D9-DDB5-4fa4-A97D-D965CCFC6D4B"
TRX_TEST_LIST_ID = "19431567-8539-422a-85D7-44EE4E166BDA"
TRX_TEST_LIST_NAME = "All Loaded Results"

# Characters outside this set cannot appear in an XML 1.0 document.
INVALID_XML_CHARACTERS = regex.compile(
    r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]"
)


def _trx(tag: str) -> str:
    return f"{{{TRX_NAMESPACE}}}{tag}"


def xml_text(text: str) -> str:
    """Remove characters that XML 1.0 cannot represent, such as ANSI escapes."""
    return INVALID_XML_CHARACTERS.sub("", text)


def to_trx(results: TestResults) -> ET.ElementTree:
    """Build a Visual Studio TRX document for the results."""
    ET.register_namespace("", TRX_NAMESPACE)
    computer_name = platform.node()

    root = ET.Element(_trx("TestRun"), id=str(results.run_id), name=results.run_name)

    unit_test_results = ET.SubElement(root, _trx("Results"))
    for test in results.tests:
        unit_test_result = ET.SubElement(
            unit_test_results,
            _trx("UnitTestResult"),
            executionId=str(test.execution_id),
            testId=str(test.test_id),
            testName=test.test_name,
            computerName=computer_name,
            testType=TRX_TEST_TYPE,
            outcome="Failed" if test.failed else "Passed",
            testListId=TRX_TEST_LIST_ID,
        )
        output = ET.SubElement(unit_test_result, _trx("Output"))
        ET.SubElement(output, _trx("StdOut")).text = xml_text(test.run_results.output)
        if test.failed:
            error_info = ET.SubElement(output, _trx("ErrorInfo"))
            message = ET.SubElement(error_info, "Message")
            message.text = xml_text(test.run_results.error_message)

    definitions = ET.SubElement(root, _trx("TestDefinitions"))
    for test in results.tests:
        unit_test = ET.SubElement(
            definitions, _trx("UnitTest"), name=test.test_name, id=str(test.test_id)
        )
        ET.SubElement(unit_test, _trx("Execution"), id=str(test.execution_id))
        ET.SubElement(
            unit_test,
            _trx("TestMethod"),
            codeBase=results.code_base,
            className=test.class_name,
            name=test.test_name,
        )

    entries = ET.SubElement(root, _trx("TestEntries"))
    for test in results.tests:
        ET.SubElement(
            entries,
            _trx("TestEntry"),
            testId=str(test.test_id),
            executionId=str(test.execution_id),
            testListId=TRX_TEST_LIST_ID,
        )

    test_lists = ET.SubElement(root, _trx("TestLists"))
    ET.SubElement(
        test_lists, _trx("TestList"), name=TRX_TEST_LIST_NAME, id=TRX_TEST_LIST_ID
    )

    summary = ET.SubElement(root, _trx("ResultSummary"), outcome="Completed")
    ET.SubElement(
        summary,
        _trx("Counters"),
        total=str(results.total),
        executed=str(results.executed),
        passed=str(results.passed),
        failed=str(results.failed),
    )
    run_output = ET.SubElement(root, _trx("Output"))
    ET.SubElement(run_output, _trx("StdOut")).text = xml_text(_run_stdout(results))

    return ET.ElementTree(root)


def _run_stdout(results: TestResults) -> str:
    """Build output followed by the output of every test."""
    lines: list[str] = []
    if results.build_results is not None:
        lines.extend(line.text for line in results.build_results.lines)
    lines.extend(test.run_results.output for test in results.tests)
    return "".join(f"{line}\n" for line in lines)


def to_junit(results: TestResults) -> ET.ElementTree:
    """Build a JUnit XML document for the results."""
    duration = sum(test.run_results.duration for test in results.tests)

    root = ET.Element(
        "testsuites",
        name=results.run_name,
        tests=str(results.total),
        failures=str(results.failed),
        errors="0",
        time=f"{duration:.3f}",
    )
    suite = ET.SubElement(
        root,
        "testsuite",
        name=results.run_name,
        tests=str(results.total),
        failures=str(results.failed),
        errors="0",
        skipped="0",
        time=f"{duration:.3f}",
    )
    if results.tests:
        suite.set("timestamp", results.tests[0].run_results.start.isoformat())

    for test in results.tests:
        case = ET.SubElement(
            suite,
            "testcase",
            name=test.test_name,
            classname=test.class_name,
            time=f"{test.run_results.duration:.3f}",
        )
        if test.failed:
            message = xml_text(test.run_results.error_message)
            failure = ET.SubElement(case, "failure", message=message, type="Error")
            failure.text = message
        ET.SubElement(case, "system-out").text = xml_text(test.run_results.output)

    if results.build_results is not None:
        ET.SubElement(suite, "system-out").text = xml_text(
            results.build_results.output
        )

    return ET.ElementTree(root)


def save_results(results: TestResults, path: Path) -> None:
    """Save results to a file, picking the format from its extension.

    ``.xml`` files are written as JUnit XML; anything else as TRX.
    """
    if path.suffix.lower() == ".xml":
        tree = to_junit(results)
    else:
        tree = to_trx(results)

    ET.indent(tree)
    tree.write(path, encoding="utf-8", xml_declaration=True)
    log.info("Saved test results to %s", path)
