# SPDX-License-Identifier: MIT
"""Tests for vsccc.core.loader."""

import os

import pytest

from vsccc.core.errors import ProjectLoadError
from vsccc.core.loader import find_project_in_directory, load_build
from vsccc.core.solution import CPP_PROJECT_GUID


def write_project(path, body=""):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"<Project>{body}</Project>")
    return path


class TestFindProjectInDirectory:
    def test_prefers_solution(self, tmp_path):
        (tmp_path / "all.sln").write_text("")
        write_project(tmp_path / "a.vcxproj")
        assert find_project_in_directory(tmp_path) == tmp_path / "all.sln"

    def test_single_project(self, tmp_path):
        write_project(tmp_path / "a.vcxproj")
        assert find_project_in_directory(tmp_path) == tmp_path / "a.vcxproj"

    def test_multiple_solutions(self, tmp_path):
        (tmp_path / "a.sln").write_text("")
        (tmp_path / "b.sln").write_text("")
        with pytest.raises(ProjectLoadError, match="multiple solutions"):
            find_project_in_directory(tmp_path)

    def test_multiple_projects(self, tmp_path):
        write_project(tmp_path / "a.vcxproj")
        write_project(tmp_path / "b.vcxproj")
        with pytest.raises(ProjectLoadError, match="multiple projects"):
            find_project_in_directory(tmp_path)

    def test_no_projects(self, tmp_path):
        with pytest.raises(ProjectLoadError, match="no projects"):
            find_project_in_directory(tmp_path)


class TestLoadBuild:
    def test_single_project(self, tmp_path):
        path = write_project(
            tmp_path / "app.vcxproj",
            '<ItemGroup><ClCompile Include="$(ProjectName).cpp" /></ItemGroup>',
        )
        build = load_build(path)
        assert build.root_dir == tmp_path.absolute()
        assert build.macros["ProjectName"] == "app"
        assert build.macros["SolutionDir"] == str(tmp_path.absolute()) + os.sep
        assert [i.identity for i in build.items] == ["app.cpp"]

    def test_directory(self, tmp_path):
        write_project(tmp_path / "app.vcxproj")
        assert load_build(tmp_path).path == tmp_path.absolute() / "app.vcxproj"

    def test_missing_path(self, tmp_path):
        with pytest.raises(ProjectLoadError, match="does not exist"):
            load_build(tmp_path / "missing.vcxproj")

    def test_properties_override_defaults(self, tmp_path):
        path = write_project(
            tmp_path / "app.vcxproj",
            """<ItemGroup>
                 <ClCompile Include="$(Configuration)\\$(Platform).cpp" />
               </ItemGroup>""",
        )
        assert load_build(path).items[0].identity == "Debug\\x64.cpp"
        build = load_build(path, {"configuration": "Release"})
        assert build.items[0].identity == "Release\\x64.cpp"

    def test_default_output_dirs(self, tmp_path):
        path = write_project(tmp_path / "app.vcxproj")
        resolved = load_build(path).projects[0].resolved_macros()
        sol = str(tmp_path.absolute()) + os.sep
        assert resolved["IntDir"] == sol + "obj\\x64_Debug\\app\\"
        assert resolved["OutDir"] == sol + "bin\\x64_Debug\\"

    def test_solution_items_in_order(self, tmp_path):
        write_project(
            tmp_path / "b" / "b.vcxproj",
            '<ItemGroup><ClCompile Include="$(ProjectName)_1.cpp" />'
            '<ClCompile Include="$(ProjectName)_2.cpp" /></ItemGroup>',
        )
        write_project(
            tmp_path / "a" / "a.vcxproj",
            '<ItemGroup><ClCompile Include="$(ProjectName).cpp" /></ItemGroup>',
        )
        (tmp_path / "s.sln").write_text(
            f'Project("{CPP_PROJECT_GUID}") = "b", "b\\b.vcxproj", "{{1}}"\n'
            f'Project("{CPP_PROJECT_GUID}") = "a", "a\\a.vcxproj", "{{2}}"\n'
        )
        build = load_build(tmp_path)
        assert [p.name for p in build.projects] == ["b", "a"]
        assert [i.identity for i in build.items] == ["b_1.cpp", "b_2.cpp", "a.cpp"]

    def test_external_includes_converted(self, tmp_path):
        path = write_project(
            tmp_path / "app.vcxproj",
            """<ItemGroup>
                 <ClCompile Include="a.cpp">
                   <AdditionalOptions>/external:I ext</AdditionalOptions>
                 </ClCompile>
               </ItemGroup>""",
        )
        item = load_build(path).items[0]
        assert item.properties["AdditionalIncludeDirectories"] == "ext"
        assert "AdditionalOptions" not in item.properties
