"""
Tests for the `templating.py` module.
"""

import os

import pytest

from anno_workspace.errors import TemplateError, ToolError
from anno_workspace.templating import patch_runnable, render_pipeline_config

from tests.conftest import PIPELINE_CONFIG_TEXT, PROCESS_GCA_TEXT


@pytest.fixture
def template(tmp_path):
    path = tmp_path / "EnsemblAnno_conf.pm"
    path.write_text(PIPELINE_CONFIG_TEXT)
    os.utime(path, (1000000000, 1000000000))
    return path


def render(template, tmp_path):
    output = tmp_path / "annotation" / "EnsemblAnno_conf.pm"
    output.parent.mkdir()
    render_pipeline_config(str(template), str(output), "GCA_000001.1", "Homo sapiens", "/data/Homo_sapiens-GCA_000001.1")
    return output


def test_render_pipeline_config(template, tmp_path):
    text = render(template, tmp_path).read_text()
    assert "'base_output_dir'              => '/data/Homo_sapiens-GCA_000001.1'," in text
    assert "'production_name'              => 'homo_sapiens-gca_000001_1'," in text
    assert "-input_ids         => [{'assembly_accession' => 'GCA_000001.1'}]," in text


def test_render_pipeline_config_changes_nothing_else(template, tmp_path):
    rendered = render(template, tmp_path).read_text().splitlines()
    original = PIPELINE_CONFIG_TEXT.splitlines()
    assert len(rendered) == len(original)
    changed = [(before, after) for before, after in zip(original, rendered) if before != after]
    assert len(changed) == 3
    assert "    'user_r'                       => ''," in rendered


def test_render_pipeline_config_keeps_template(template, tmp_path):
    render(template, tmp_path)
    assert template.read_text() == PIPELINE_CONFIG_TEXT


def test_render_pipeline_config_preserves_metadata(template, tmp_path):
    os.chmod(template, 0o640)
    output = render(template, tmp_path)
    assert os.stat(output).st_mode == os.stat(template).st_mode


def test_render_pipeline_config_changed_template(tmp_path):
    template = tmp_path / "EnsemblAnno_conf.pm"
    template.write_text(PIPELINE_CONFIG_TEXT.replace("-input_ids         => [],", "-input_ids => [],"))
    output = tmp_path / "out.pm"
    with pytest.raises(TemplateError) as excinfo:
        render_pipeline_config(str(template), str(output), "GCA_000001.1", "Homo sapiens", "/data/x")
    assert "-input_ids" in excinfo.value.pattern


def test_render_pipeline_config_missing_template(tmp_path):
    with pytest.raises(ToolError, match="cannot copy"):
        render_pipeline_config(str(tmp_path / "missing.pm"), str(tmp_path / "out.pm"), "GCA_000001.1", "Homo sapiens", "/data/x")


def test_patch_runnable(tmp_path):
    runnable = tmp_path / "ProcessGCA.pm"
    runnable.write_text(PROCESS_GCA_TEXT)
    patch_runnable(str(runnable))
    text = runnable.read_text()
    assert "  #my $current_genebuild = $self->param('current_genebuild');\n" in text
    assert "  my $current_genebuild  = 1;\n" in text
    assert "= 0;" not in text
    assert "$self->param('genebuild', $current_genebuild);" in text


def test_patch_runnable_twice(tmp_path):
    runnable = tmp_path / "ProcessGCA.pm"
    runnable.write_text(PROCESS_GCA_TEXT)
    patch_runnable(str(runnable))
    with pytest.raises(TemplateError):
        patch_runnable(str(runnable))


def test_patch_runnable_missing(tmp_path):
    with pytest.raises(ToolError, match="No such file"):
        patch_runnable(str(tmp_path / "ProcessGCA.pm"))
