"""HTML template generation for the topology page.

This module combines CSS and JavaScript from the other template modules
into the single page served by the session server.
"""

import time

from .scripts import get_all_scripts
from .styles import get_all_styles


def generate_html_template() -> str:
    """Generate the complete HTML page.

    Returns:
        Complete HTML string with embedded CSS and JavaScript
    """
    # Add timestamp for cache busting
    build_timestamp = int(time.time())

    html = f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Dependency Topology</title>
    <!-- Build: {build_timestamp} -->
    <script src="https://d3js.org/d3.v7.min.js"></script>
    <style>
{get_all_styles()}
    </style>
</head>
<body>
    <section id="topology">
        <div id="toolbar">
            <div class="toolbar-group">
                <button id="expand-btn" title="Fullscreen">⤢</button>
                <span class="title">Dependency Topology</span>
            </div>
            <div class="toolbar-group">
                <div class="search-box">
                    <input id="search-input" type="text" placeholder="Search nodes...">
                    <button id="search-clear" title="Clear search">×</button>
                </div>
                <button id="isolated-btn" title="Show isolated nodes">Isolated hidden</button>
                <div class="segmented">
                    <button data-action="view_mode" data-value="force">Force</button>
                    <button data-action="view_mode" data-value="tree">Tree</button>
                </div>
                <div class="segmented">
                    <button data-action="granularity" data-value="file">Files</button>
                    <button data-action="granularity" data-value="directory">Directories</button>
                </div>
            </div>
        </div>

        <div id="canvas">
            <svg id="graph"></svg>
            <div id="detail-panel" hidden>
                <div class="detail-header">
                    <span id="detail-title"></span>
                    <button id="detail-close" title="Close">×</button>
                </div>
                <div id="detail-path"></div>
                <div id="detail-body"></div>
            </div>
        </div>

        <div id="footer">
            <span id="node-count">0 nodes</span>
            <span id="edge-count">0 dependencies</span>
        </div>
    </section>

    <script>
{get_all_scripts()}
    </script>
</body>
</html>"""
    return html
