"""Minimal HTML console that consumes the dashboard API."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["console"])


@router.get("/login", response_class=HTMLResponse)
async def console() -> HTMLResponse:
    """Sign-in page and listings console."""
    return HTMLResponse(_CONSOLE_HTML)


_CONSOLE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Listings Admin</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      h1 { margin-bottom: 0.5rem; }
      .row { margin-bottom: 1rem; }
      input, select { padding: 0.4rem 0.6rem; width: 320px; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      table { border-collapse: collapse; margin-top: 1rem; }
      td, th { border-bottom: 1px solid #ddd; padding: 0.4rem 0.8rem; }
      .error { color: #b91c1c; }
    </style>
  </head>
  <body>
    <h1>Listings Admin</h1>
    <div class="row">
      <input id="email" type="email" placeholder="Email" />
      <input id="password" type="password" placeholder="Password" />
      <button onclick="login()">Sign in</button>
      <button onclick="logout()">Sign out</button>
    </div>
    <div class="row">
      <select id="kind" onchange="loadRecords()">
        <option value="plots">Plots</option>
        <option value="resale">Resale Properties</option>
        <option value="primary-sale">Primary Sale Properties</option>
        <option value="rental">Rental Properties</option>
      </select>
      <button onclick="loadRecords()">Refresh</button>
    </div>
    <div id="error" class="error"></div>
    <table>
      <thead>
        <tr><th>Property</th><th>Location</th><th>Price</th><th></th></tr>
      </thead>
      <tbody id="rows"></tbody>
    </table>
    <script>
      function headers() {
        return {
          'Content-Type': 'application/json',
          'X-Auth-Token': localStorage.getItem('token') || ''
        };
      }
      function showError(text) {
        document.getElementById('error').textContent = text || '';
      }
      async function login() {
        const res = await fetch('/auth/login', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({
            email: document.getElementById('email').value,
            password: document.getElementById('password').value
          })
        });
        if (!res.ok) { showError('Sign-in failed'); return; }
        const data = await res.json();
        localStorage.setItem('token', data.token);
        showError('');
        loadRecords();
      }
      async function logout() {
        await fetch('/auth/logout', { method: 'POST', headers: headers() });
        localStorage.removeItem('token');
        document.getElementById('rows').innerHTML = '';
      }
      async function loadRecords() {
        const kind = document.getElementById('kind').value;
        const res = await fetch('/dashboard/' + kind, {
          headers: headers(), redirect: 'manual'
        });
        if (!res.ok) { showError('Error: ' + res.status); return; }
        const data = await res.json();
        const body = document.getElementById('rows');
        body.innerHTML = '';
        for (const row of data.rows) {
          const tr = document.createElement('tr');
          const cells = [row.project, row.location, row.rate ? `${row.rate} \u00b7 ${row.price}` : row.price];
          for (const text of cells) {
            const td = document.createElement('td');
            td.textContent = text;
            tr.appendChild(td);
          }
          const action = document.createElement('td');
          const button = document.createElement('button');
          button.textContent = 'Delete';
          button.onclick = () => deleteRecord(kind, row.id);
          action.appendChild(button);
          tr.appendChild(action);
          body.appendChild(tr);
        }
        showError('');
      }
      async function deleteRecord(kind, id) {
        if (!confirm('Are you sure you want to delete this listing?')) return;
        const res = await fetch('/dashboard/' + kind + '/' + id + '?confirm=true', {
          method: 'DELETE', headers: headers()
        });
        if (!res.ok) {
          const data = await res.json();
          showError(data.detail || ('Error: ' + res.status));
          return;
        }
        loadRecords();
      }
    </script>
  </body>
</html>
"""
