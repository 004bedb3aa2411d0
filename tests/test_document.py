from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from texmark.adapters.latex import LaTeXRenderer
from texmark.core.buffer import OutputBuffer
from texmark.core.config import PackageSpec, RendererConfig
from texmark.core.context import Matter
from texmark.core.nodes import ListFlags


def test_fragment_mode_has_no_preamble(renderer: LaTeXRenderer, out: OutputBuffer) -> None:
    renderer.document_header(out, True)
    renderer.document_footer(out, True)

    assert out.getvalue() == ""


def test_standalone_preamble(standalone_renderer: LaTeXRenderer, out: OutputBuffer) -> None:
    standalone_renderer.document_header(out, True)

    rendered = out.getvalue()
    assert rendered.startswith("\\documentclass{article}\n")
    assert "\\usepackage{graphicx}\n" in rendered
    assert "\\usepackage[margin=1in]{geometry}\n" in rendered
    assert "\\usepackage[utf8]{inputenc}\n" in rendered
    assert "\\usepackage[normalem]{ulem}\n" in rendered
    assert "\\usepackage{hyperref}\n" in rendered
    assert "\\hypersetup{colorlinks,%" in rendered
    assert "urlcolor=black,%" in rendered
    assert "pdfauthor={TeXMark v" in rendered
    assert "\\newcommand{\\HRule}{\\rule{\\linewidth}{0.5mm}}" in rendered
    assert "\\parindent=0pt" in rendered
    assert "\\input" not in rendered
    assert rendered.endswith("\\begin{document}\n")


def test_preamble_only_for_first_document(
    standalone_renderer: LaTeXRenderer, out: OutputBuffer
) -> None:
    standalone_renderer.document_header(out, False)
    standalone_renderer.document_footer(out, False)

    assert out.getvalue() == ""


def test_preamble_honours_configuration(out: OutputBuffer) -> None:
    config = RendererConfig(
        standalone=True,
        document_class="report",
        packages=[PackageSpec(name="amsmath")],
        link_color="blue",
        head=Path("macros.tex"),
    )
    LaTeXRenderer(config=config).document_header(out, True)

    rendered = out.getvalue()
    assert rendered.startswith("\\documentclass{report}\n")
    assert "\\usepackage{amsmath}\n" in rendered
    assert "\\usepackage{graphicx}" not in rendered
    assert "linkcolor=blue,%" in rendered
    assert "\\input{macros.tex}\n" in rendered


def test_standalone_footer_closes_document(
    standalone_renderer: LaTeXRenderer, out: OutputBuffer
) -> None:
    standalone_renderer.document_footer(out, True)

    assert out.getvalue() == "\n\\end{document}\n"


def test_footer_writes_index_before_end(
    standalone_renderer: LaTeXRenderer, out: OutputBuffer
) -> None:
    standalone_renderer.index(out, "Alpha")
    standalone_renderer.index(out, "Alpha", principal=True)
    standalone_renderer.index(out, "Alpha", "Beta")
    standalone_renderer.index(out, "gamma_ray")
    marker = len(out)

    standalone_renderer.document_footer(out, True)

    rendered = out.since(marker)
    assert "\\section*{Index}" in rendered
    assert "\\begin{description}" in rendered
    assert (
        "\\item[Alpha] \\hyperlink{idxref:0-0}{1}, \\hyperlink{idxref:0-1}{\\textbf{2}}\n"
        in rendered
    )
    assert "\\item[\\quad Beta] \\hyperlink{idxref:1-0}{1}\n" in rendered
    assert "\\item[gamma\\_ray] \\hyperlink{idxref:2-0}{1}\n" in rendered
    assert rendered.index("\\end{description}") < rendered.index("\\end{document}")


def test_index_section_can_be_disabled(out: OutputBuffer) -> None:
    renderer = LaTeXRenderer(config=RendererConfig(standalone=True, emit_index=False))
    renderer.index(out, "Alpha")
    marker = len(out)

    renderer.document_footer(out, True)

    assert out.since(marker) == "\n\\end{document}\n"


def test_empty_index_renders_nothing(renderer: LaTeXRenderer, out: OutputBuffer) -> None:
    renderer.render_index(out)

    assert out.getvalue() == ""


def test_footer_closes_open_abstract(
    renderer: LaTeXRenderer, out: OutputBuffer, content: Callable
) -> None:
    renderer.special_header(out, "abstract", content(out, "Abstract"))
    renderer.document_footer(out, True)

    assert out.getvalue() == "\n\\begin{abstract}\n\n\\end{abstract}\n"


def test_back_matter_starts_appendix_once(renderer: LaTeXRenderer, out: OutputBuffer) -> None:
    renderer.document_matter(out, Matter.BACK)
    renderer.document_matter(out, Matter.BACK)

    assert out.getvalue() == "\n\\appendix\n"
    assert renderer.state.is_appendix


def test_matter_changes_in_article_emit_nothing(
    renderer: LaTeXRenderer, out: OutputBuffer
) -> None:
    renderer.document_matter(out, Matter.FRONT)
    renderer.document_matter(out, Matter.BODY)

    assert out.getvalue() == ""
    assert not renderer.state.is_appendix


@pytest.mark.parametrize("document_class", ["book", "memoir"])
def test_book_matter_commands(out: OutputBuffer, document_class: str) -> None:
    renderer = LaTeXRenderer(config=RendererConfig(document_class=document_class))
    renderer.document_matter(out, Matter.FRONT)
    renderer.document_matter(out, Matter.BODY)
    renderer.document_matter(out, Matter.BACK)

    assert out.getvalue() == "\n\\frontmatter\n\n\\mainmatter\n\n\\appendix\n"


def test_heading_empty_list_and_listing_in_sequence(
    renderer: LaTeXRenderer, out: OutputBuffer, content: Callable
) -> None:
    renderer.document_header(out, True)
    renderer.header(out, content(out, "Intro"), 1)
    renderer.list(out, content(out), ListFlags.NONE)
    renderer.block_code(out, "x:=1", lang="go")
    renderer.document_footer(out, True)

    assert out.getvalue() == (
        "\n\\section{Intro}\\label{intro}\n"
        "\n\\begin{lstlisting}[language=go]\nx:=1\n\\end{lstlisting}\n"
    )


def test_full_standalone_document(
    standalone_renderer: LaTeXRenderer, out: OutputBuffer, content: Callable
) -> None:
    renderer = standalone_renderer
    renderer.document_header(out, True)
    renderer.title_block(out, "% Report\n% Ada\n% Today")
    renderer.header(out, content(out, "Results"), 1)
    renderer.paragraph(
        out,
        content(
            out,
            "",
            lambda: renderer.normal_text(out, "Costs rose 5% "),
            lambda: renderer.index(out, "costs"),
            lambda: renderer.footnote_ref(out, "src", 1),
        ),
    )
    renderer.footnotes(out, content(out, "", lambda: renderer.footnote_item(out, "src", "Ledger")))
    renderer.document_matter(out, Matter.BACK)
    renderer.header(out, content(out, "Data"), 1)
    renderer.document_footer(out, True)

    rendered = out.getvalue()
    expected_order = [
        "\\begin{document}",
        "\\title{Report}",
        "\\maketitle",
        "\\section{Results}\\label{results}",
        "Costs rose 5\\% \\hypertarget{idxref:0-0}{}\\footnotemark[1]",
        "\\footnotetext[1]{Ledger}",
        "\\appendix",
        "\\section{Data}\\label{data}",
        "\\item[costs] \\hyperlink{idxref:0-0}{1}",
        "\\end{document}",
    ]
    positions = [rendered.index(fragment) for fragment in expected_order]
    assert positions == sorted(positions)
