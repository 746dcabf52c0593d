import pytest


@pytest.fixture
def workflow_document():
    """A small workflow with nested modules, conditions and an SDK payload."""
    return {
        "properties": {"name": "onboarding"},
        "modules": [
            {
                "identifier": "module_selfie",
                "category": "face",
                "subcategory": "liveness",
                "nextStepReference": "condition_face_ok",
                "name": "Selfie",
                "version": 2,
                "stepReference": "step_1",
                "subModules": [
                    {
                        "identifier": "module_retake",
                        "category": "face",
                        "name": "Retake",
                        "stepReference": "step_1a",
                    }
                ],
            },
            {
                "identifier": "module_id_card",
                "category": "document",
                "name": "ID Card",
                "version": 0,
                "stepReference": "step_2",
            },
        ],
        "conditions": {
            "condition_face_ok": {
                "rule": "face.match == 'yes'",
                "ifTrueConfigs": {"goto": "module_id_card", "retries": 3},
                "ifFalseConfigs": {"goto": "decline"},
            },
            "condition_doc_ok": {
                "rule": "doc.valid",
                "ifTrueConfigs": {"goto": "approve"},
                "meta": {"owner": "risk"},
            },
            "notes": {"ignored": True},
        },
        "sdkResponse": {
            "result": {"details": {"firstName": "Bob", "date_of_birth": "1990-01-01"}},
            "status": "success",
            "tags": [{"nested": "not collected"}],
        },
    }
