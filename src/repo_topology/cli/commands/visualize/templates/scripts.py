"""JavaScript for the topology page.

The page is a renderer only. Layout, styling, search matching and selection
are computed by the server; the script draws scene frames, applies position
and style updates, and posts user input back.

Frames (server-sent events):
- snapshot: full state on connect
- clear / scene: a rebuild (surface cleared, then the new scene)
- positions: simulation tick
- styles: search emphasis changed
- detail: selection panel content
- state: toolbar toggles and footer counts
"""


def get_all_scripts() -> str:
    """Generate all JavaScript for the page.

    Returns:
        Complete JavaScript code as a single string
    """
    return """
// ============================================================================
// STATE
// ============================================================================

const svg = d3.select('#graph');
const canvas = document.getElementById('canvas');
let viewState = null;
let scene = null;
let nodeSel = null;
let linkSel = null;
let labelSel = null;
let positions = new Map();
let currentTransform = d3.zoomIdentity;

// ============================================================================
// API
// ============================================================================

function postAction(action, value) {
    return fetch('/api/view', {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify({action: action, value: value === undefined ? null : value}),
    }).then(r => r.json());
}

function reportSize() {
    postAction('resize', {width: canvas.clientWidth, height: canvas.clientHeight});
}

// ============================================================================
// DRAWING
// ============================================================================

function clearSurface() {
    svg.selectAll('*').remove();
    nodeSel = linkSel = labelSel = null;
    positions = new Map();
}

function drawScene(s) {
    clearSurface();
    scene = s;
    if (!s) return;

    svg.attr('width', s.width).attr('height', s.height);
    if (s.nodes.length === 0) return;

    s.nodes.forEach(n => positions.set(n.id, [n.x, n.y]));

    const g = svg.append('g');
    const base = `translate(${s.translate[0]}, ${s.translate[1]})`;
    const inner = g.append('g').attr('transform', base);
    svg.call(
        d3.zoom().scaleExtent([0.1, 4]).on('zoom', (event) => {
            currentTransform = event.transform;
            g.attr('transform', event.transform);
        })
    );
    g.attr('transform', currentTransform);

    inner.append('defs').append('marker')
        .attr('id', 'arrowhead')
        .attr('viewBox', '0 -5 10 10')
        .attr('refX', 20)
        .attr('refY', 0)
        .attr('markerWidth', 6)
        .attr('markerHeight', 6)
        .attr('orient', 'auto')
        .append('path')
        .attr('d', 'M0,-5L10,0L0,5')
        .attr('fill', '#94a3b8');

    if (s.kind === 'tree') {
        const linkPath = d3.linkHorizontal()
            .source(l => positions.get(l.source))
            .target(l => positions.get(l.target));
        linkSel = inner.append('g').selectAll('path')
            .data(s.links)
            .join('path')
            .attr('class', 'link')
            .attr('d', linkPath);
    } else {
        linkSel = inner.append('g').selectAll('line')
            .data(s.links)
            .join('line')
            .attr('class', 'link')
            .attr('marker-end', 'url(#arrowhead)');
    }
    linkSel.attr('opacity', l => l.opacity);

    nodeSel = inner.append('g').selectAll('circle')
        .data(s.nodes, n => n.id)
        .join('circle')
        .attr('class', 'node')
        .attr('r', n => n.radius)
        .attr('fill', n => n.color)
        .attr('opacity', n => n.opacity)
        .on('click', (event, n) => {
            if (n.role !== 'root') postAction('select', n.id);
        });
    nodeSel.append('title').text(n => n.tooltip);

    labelSel = inner.append('g').selectAll('text')
        .data(s.nodes, n => n.id)
        .join('text')
        .attr('class', 'label')
        .attr('dx', n => n.radius + 4)
        .attr('dy', 3)
        .attr('opacity', n => (n.label_visible ? 1 : 0))
        .text(n => n.label);

    if (s.kind === 'force') {
        nodeSel
            .on('mouseenter', (event, n) => {
                labelSel.attr('opacity', l => (l.id === n.id || l.label_visible ? 1 : 0));
            })
            .on('mouseleave', () => {
                labelSel.attr('opacity', l => (l.label_visible ? 1 : 0));
            })
            .call(d3.drag()
                .on('drag', (event, n) => {
                    postAction('drag', {id: n.id, x: event.x, y: event.y});
                })
                .on('end', (event, n) => {
                    postAction('release', {id: n.id});
                }));
    }

    movePositions();
}

function movePositions() {
    if (!nodeSel) return;
    const pos = id => positions.get(id) || [0, 0];
    nodeSel.attr('cx', n => pos(n.id)[0]).attr('cy', n => pos(n.id)[1]);
    labelSel.attr('x', n => pos(n.id)[0]).attr('y', n => pos(n.id)[1]);
    if (scene && scene.kind === 'force') {
        linkSel
            .attr('x1', l => pos(l.source)[0])
            .attr('y1', l => pos(l.source)[1])
            .attr('x2', l => pos(l.target)[0])
            .attr('y2', l => pos(l.target)[1]);
    }
}

function applyStyles(styles) {
    if (!nodeSel) return;
    scene.nodes.forEach(n => {
        const st = styles.nodes[n.id];
        if (st) Object.assign(n, st);
    });
    nodeSel.attr('opacity', n => n.opacity);
    labelSel.attr('opacity', n => (n.label_visible ? 1 : 0));
    linkSel.attr('opacity', styles.edge_opacity);
}

// ============================================================================
// PANELS
// ============================================================================

function shortName(id) {
    const idx = id.lastIndexOf('/');
    return idx >= 0 ? id.substring(idx + 1) : id;
}

function renderList(container, title, ids) {
    if (ids.length === 0) return;
    const section = document.createElement('div');
    section.className = 'detail-section';
    const heading = document.createElement('h4');
    heading.textContent = `${title} (${ids.length})`;
    const list = document.createElement('div');
    list.className = 'detail-list';
    ids.forEach(id => {
        const item = document.createElement('div');
        item.title = id;
        item.textContent = shortName(id);
        list.appendChild(item);
    });
    section.append(heading, list);
    container.appendChild(section);
}

function showDetail(detail) {
    const panel = document.getElementById('detail-panel');
    if (!detail) {
        panel.hidden = true;
        return;
    }
    panel.hidden = false;
    document.getElementById('detail-title').textContent = shortName(detail.id);
    document.getElementById('detail-path').textContent = detail.id;
    const body = document.getElementById('detail-body');
    body.replaceChildren();
    renderList(body, 'Depends on', detail.depends_on);
    renderList(body, 'Depended on by', detail.depended_by);
    if (!body.hasChildNodes()) {
        const empty = document.createElement('div');
        empty.textContent = 'No dependencies';
        body.appendChild(empty);
    }
}

function showState(payload) {
    const previous = viewState;
    viewState = payload.state;
    const stats = payload.stats;

    document.querySelectorAll('.segmented button').forEach(btn => {
        btn.classList.toggle('active', viewState[btn.dataset.action] === btn.dataset.value);
    });
    const isolated = document.getElementById('isolated-btn');
    isolated.textContent = viewState.hide_isolated ? 'Isolated hidden' : 'Showing all';
    isolated.title = viewState.hide_isolated ? 'Show isolated nodes' : 'Hide isolated nodes';

    const expandBtn = document.getElementById('expand-btn');
    expandBtn.textContent = viewState.expanded ? '⤡' : '⤢';
    expandBtn.title = viewState.expanded ? 'Exit fullscreen (Esc)' : 'Fullscreen';
    document.getElementById('topology').classList.toggle('expanded', viewState.expanded);
    if (previous && previous.expanded !== viewState.expanded) {
        requestAnimationFrame(reportSize);
    }

    const input = document.getElementById('search-input');
    if (document.activeElement !== input) input.value = viewState.search_term;
    document.getElementById('search-clear').style.display = viewState.search_term ? 'block' : 'none';

    document.getElementById('node-count').textContent = `${stats.node_count} nodes`;
    document.getElementById('edge-count').textContent = `${stats.edge_count} dependencies`;
}

// ============================================================================
// EVENTS
// ============================================================================

function connect() {
    const source = new EventSource('/api/events');
    source.addEventListener('snapshot', e => {
        const snap = JSON.parse(e.data);
        showState({state: snap.state, stats: snap.stats});
        drawScene(snap.scene);
        showDetail(snap.detail);
        reportSize();
    });
    source.addEventListener('clear', () => clearSurface());
    source.addEventListener('scene', e => drawScene(JSON.parse(e.data)));
    source.addEventListener('positions', e => {
        const update = JSON.parse(e.data);
        Object.entries(update).forEach(([id, p]) => positions.set(id, p));
        movePositions();
    });
    source.addEventListener('styles', e => applyStyles(JSON.parse(e.data)));
    source.addEventListener('detail', e => showDetail(JSON.parse(e.data)));
    source.addEventListener('state', e => showState(JSON.parse(e.data)));
}

document.querySelectorAll('.segmented button').forEach(btn => {
    btn.addEventListener('click', () => postAction(btn.dataset.action, btn.dataset.value));
});
document.getElementById('isolated-btn').addEventListener('click', () => postAction('hide_isolated'));
document.getElementById('expand-btn').addEventListener('click', () => postAction('expanded'));
document.getElementById('detail-close').addEventListener('click', () => postAction('clear_selection'));
document.getElementById('search-input').addEventListener('input', e => postAction('search', e.target.value));
document.getElementById('search-clear').addEventListener('click', () => {
    document.getElementById('search-input').value = '';
    postAction('search', '');
});

window.addEventListener('keydown', e => {
    if (e.key === 'Escape' && viewState && viewState.expanded) postAction('key', 'Escape');
});
window.addEventListener('resize', reportSize);

connect();
"""
