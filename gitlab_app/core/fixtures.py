"""In-memory sample dataset used when no GitLab connection is configured.

Records follow the GitLab REST issue payload shape (snake_case keys), with
``project`` embedded so the sample can be rendered without extra lookups.
"""

from __future__ import annotations

from typing import Any

SAMPLE_ISSUES: list[dict[str, Any]] = [
    {
        "id": 1,
        "iid": 101,
        "title": "Issue 1: Login form bug",
        "description": "Users cannot log in when their password contains special characters",
        "project": {"id": 1, "name": "Project A"},
        "state": "opened",
        "severity": "high",
        "created_at": "2023-10-01T12:00:00Z",
        "updated_at": "2023-10-02T14:30:00Z",
        "closed_at": None,
        "author": {"id": 1, "name": "João Silva"},
        "web_url": "https://gitlab.com/project-a/issues/1",
        "labels": ["bug", "frontend"],
        "milestone": {"id": 1, "title": "Sprint 1"},
        "assignees": [{"id": 2, "name": "Ana Costa", "username": "anacosta", "avatar_url": ""}],
    },
    {
        "id": 2,
        "iid": 102,
        "title": "Issue 2: Improve API performance",
        "description": "Optimize database queries to reduce response time",
        "project": {"id": 2, "name": "Project B"},
        "state": "closed",
        "severity": "medium",
        "created_at": "2023-09-25T09:30:00Z",
        "updated_at": "2023-10-04T11:20:00Z",
        "closed_at": "2023-10-05T15:45:00Z",
        "author": {"id": 3, "name": "Maria Souza"},
        "web_url": "https://gitlab.com/project-b/issues/2",
        "labels": ["enhancement", "backend"],
        "milestone": {"id": 2, "title": "Sprint 2"},
        "assignees": [{"id": 4, "name": "Pedro Santos", "username": "pedrosantos", "avatar_url": ""}],
    },
    {
        "id": 3,
        "iid": 103,
        "title": "Issue 3: Profile page error",
        "description": "Profile picture does not load correctly on mobile devices",
        "project": {"id": 3, "name": "Project C"},
        "state": "opened",
        "severity": "critical",
        "created_at": "2023-10-10T08:15:00Z",
        "updated_at": "2023-10-10T16:45:00Z",
        "closed_at": None,
        "author": {"id": 5, "name": "Carlos Oliveira"},
        "web_url": "https://gitlab.com/project-c/issues/3",
        "labels": ["bug", "mobile"],
        "milestone": {"id": 3, "title": "Sprint 3"},
        "assignees": [{"id": 6, "name": "Lucia Ferreira", "username": "luciaferreira", "avatar_url": ""}],
    },
    {
        "id": 4,
        "iid": 104,
        "title": "Issue 4: Implement two-factor authentication",
        "description": "Add 2FA support through an authenticator app or SMS",
        "project": {"id": 1, "name": "Project A"},
        "state": "opened",
        "severity": "high",
        "created_at": "2023-10-15T10:00:00Z",
        "updated_at": "2023-10-16T09:30:00Z",
        "closed_at": None,
        "author": {"id": 7, "name": "Roberto Almeida"},
        "web_url": "https://gitlab.com/project-a/issues/4",
        "labels": ["security", "enhancement"],
        "milestone": {"id": 4, "title": "Sprint 4"},
        "assignees": [{"id": 8, "name": "Fernanda Lima", "username": "fernandalima", "avatar_url": ""}],
    },
    {
        "id": 5,
        "iid": 105,
        "title": "Issue 5: Update API documentation",
        "description": "Documentation is outdated after the latest API changes",
        "project": {"id": 2, "name": "Project B"},
        "state": "closed",
        "severity": "low",
        "created_at": "2023-09-20T14:45:00Z",
        "updated_at": "2023-09-28T16:20:00Z",
        "closed_at": "2023-09-30T11:10:00Z",
        "author": {"id": 9, "name": "Gabriel Costa"},
        "web_url": "https://gitlab.com/project-b/issues/5",
        "labels": ["documentation"],
        "milestone": {"id": 2, "title": "Sprint 2"},
        "assignees": [{"id": 10, "name": "Juliana Martins", "username": "julianamartins", "avatar_url": ""}],
    },
    {
        "id": 6,
        "iid": 106,
        "title": "Issue 6: File upload problem",
        "description": "Large files are not uploaded correctly",
        "project": {"id": 1, "name": "Project A"},
        "state": "closed",
        "severity": "high",
        "created_at": "2023-08-15T09:20:00Z",
        "updated_at": "2023-08-20T14:30:00Z",
        "closed_at": "2023-09-05T11:45:00Z",
        "author": {"id": 3, "name": "Maria Souza"},
        "web_url": "https://gitlab.com/project-a/issues/6",
        "labels": ["bug", "backend"],
        "milestone": {"id": 1, "title": "Sprint 1"},
        "assignees": [{"id": 4, "name": "Pedro Santos", "username": "pedrosantos", "avatar_url": ""}],
    },
    {
        "id": 7,
        "iid": 107,
        "title": "Issue 7: Implement dark theme",
        "description": "Add dark theme support across the whole application",
        "project": {"id": 3, "name": "Project C"},
        "state": "closed",
        "severity": "medium",
        "created_at": "2023-11-05T10:30:00Z",
        "updated_at": "2023-11-15T16:20:00Z",
        "closed_at": "2023-11-20T09:15:00Z",
        "author": {"id": 7, "name": "Roberto Almeida"},
        "web_url": "https://gitlab.com/project-c/issues/7",
        "labels": ["enhancement", "frontend"],
        "milestone": {"id": 5, "title": "Sprint 5"},
        "assignees": [{"id": 6, "name": "Lucia Ferreira", "username": "luciaferreira", "avatar_url": ""}],
    },
    {
        "id": 8,
        "iid": 108,
        "title": "Issue 8: Optimize image loading",
        "description": "Implement lazy loading to improve performance",
        "project": {"id": 2, "name": "Project B"},
        "state": "opened",
        "severity": "low",
        "created_at": "2023-11-25T08:45:00Z",
        "updated_at": "2023-11-26T14:10:00Z",
        "closed_at": None,
        "author": {"id": 9, "name": "Gabriel Costa"},
        "web_url": "https://gitlab.com/project-b/issues/8",
        "labels": ["enhancement", "performance"],
        "milestone": {"id": 5, "title": "Sprint 5"},
        "assignees": [{"id": 10, "name": "Juliana Martins", "username": "julianamartins", "avatar_url": ""}],
    },
]
