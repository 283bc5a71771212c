import json
from xml.etree import ElementTree as ET

from ancestry_layout import calculate_tree_layout
from ancestry_layout.cli import main
from ancestry_layout.render import render_svg

from conftest import person

SVG = "{http://www.w3.org/2000/svg}"

CSV = (
    "id;father_id;mother_id;sibling_order;name\n"
    "1;;;;Johann\n"
    "2;1;;0;Anna\n"
    "3;1;;1;Karl\n"
    "4;3;;;Marie\n"
)


class TestRenderSvg:

    def test_draws_cards_and_connectors(self, tmp_path, three_generations):
        result = calculate_tree_layout(three_generations, 900)
        out = render_svg(result, tmp_path / "tree.svg")
        root = ET.parse(out).getroot()
        assert len(root.findall(f"{SVG}rect")) == len(result.nodes)
        assert len(root.findall(f"{SVG}path")) == len(result.nodes) - 1
        labels = [text.text for text in root.findall(f"{SVG}text")]
        assert "grandpa" in labels

    def test_label_field(self, tmp_path):
        result = calculate_tree_layout([person("r", name="Johann")], 900)
        root = ET.parse(render_svg(result, tmp_path / "one.svg")).getroot()
        assert [text.text for text in root.findall(f"{SVG}text")] == ["Johann"]

    def test_empty_result(self, tmp_path):
        result = calculate_tree_layout([person("a"), person("b")], 900)
        root = ET.parse(render_svg(result, tmp_path / "empty.svg")).getroot()
        assert root.findall(f"{SVG}rect") == []


class TestCli:

    def test_writes_json_and_svg(self, tmp_path, capsys):
        data = tmp_path / "data.csv"
        data.write_text(CSV, encoding="utf-8")
        out_json, out_svg = tmp_path / "layout.json", tmp_path / "tree.svg"

        argv = [str(data), "-w", "600", "--json", str(out_json), "--svg", str(out_svg)]
        assert main(argv) == 0

        layout = json.loads(out_json.read_text(encoding="utf-8"))
        assert [node["id"] for node in layout["nodes"]] == ["1", "2", "3", "4"]
        assert layout["extent"]["depth_spacing"] == 200
        assert out_svg.exists()
        assert "4 nodes, 2 connections" in capsys.readouterr().out

    def test_parent_columns(self, tmp_path):
        data = tmp_path / "data.csv"
        data.write_text("id;parent1_id\n0;\n1;0\n", encoding="utf-8")
        out_json = tmp_path / "layout.json"
        argv = [str(data), "--father-column", "parent1_id", "--json", str(out_json)]
        assert main(argv) == 0
        layout = json.loads(out_json.read_text(encoding="utf-8"))
        assert layout["connections"][0]["parent"]["id"] == "0"

    def test_fatal_diagnostic_exit_status(self, tmp_path, capsys):
        data = tmp_path / "data.csv"
        data.write_text("id;father_id\na;\nb;\n", encoding="utf-8")
        assert main([str(data)]) == 1
        assert "MultipleRootsFound" in capsys.readouterr().out

    def test_invalid_records(self, tmp_path):
        data = tmp_path / "data.csv"
        data.write_text("id;father_id;sibling_order\na;;first\n", encoding="utf-8")
        assert main([str(data)]) == 2
