"""Tests for deletion policies and the JSON report."""

import json

import pytest

from mediasweep.common.actions import (KEEP_ALL, apply_deletion_policy, handle_duplicates,
                                       report_path_for, write_report)
from mediasweep.common.models import DeletionPolicy, DuplicateGroup, MediaFile, Report

from .conftest import ScriptedPrompter, touch_videos


@pytest.fixture
def triple(video_dir):
    paths = touch_videos(video_dir, ['a.mp4', 'b.mp4', 'c.mp4'])
    return DuplicateGroup([MediaFile(p) for p in paths])


@pytest.fixture
def two_groups(video_dir):
    paths = touch_videos(video_dir, ['a.mp4', 'b.mp4', 'c.mp4', 'd.mp4', 'e.mp4'])
    return [DuplicateGroup([MediaFile(paths[0]), MediaFile(paths[2])]),
            DuplicateGroup([MediaFile(paths[1]), MediaFile(paths[3]), MediaFile(paths[4])])]


def remaining(directory):
    return sorted(p.name for p in directory.iterdir())


class TestDeletionPolicy:
    def test_parse_is_case_insensitive(self):
        assert DeletionPolicy.parse('ALL') is DeletionPolicy.ALL
        assert DeletionPolicy.parse(' yes ') is DeletionPolicy.YES

    def test_parse_rejects_unknown_values(self):
        with pytest.raises(ValueError):
            DeletionPolicy.parse('maybe')


class TestApplyDeletionPolicy:
    def test_no_deletes_nothing(self, two_groups, video_dir):
        prompter = ScriptedPrompter()
        assert apply_deletion_policy(two_groups, DeletionPolicy.NO, prompter) == []
        assert len(remaining(video_dir)) == 5
        assert prompter.asked == []

    def test_all_keeps_first_of_each_group_after_confirmation(self, triple, video_dir):
        prompter = ScriptedPrompter(confirmations=[True])
        deleted = apply_deletion_policy([triple], DeletionPolicy.ALL, prompter)
        assert [p.name for p in deleted] == ['b.mp4', 'c.mp4']
        assert remaining(video_dir) == ['a.mp4']
        assert prompter.asked[0][0] == 'confirm'

    def test_all_declined_deletes_nothing(self, triple, video_dir):
        prompter = ScriptedPrompter(confirmations=[False])
        assert apply_deletion_policy([triple], DeletionPolicy.ALL, prompter) == []
        assert remaining(video_dir) == ['a.mp4', 'b.mp4', 'c.mp4']

    def test_all_cancelled_prompt_deletes_nothing(self, triple, video_dir):
        assert apply_deletion_policy([triple], DeletionPolicy.ALL, ScriptedPrompter()) == []
        assert len(remaining(video_dir)) == 3

    def test_all_with_force_does_not_prompt(self, two_groups, video_dir):
        prompter = ScriptedPrompter()
        deleted = apply_deletion_policy(two_groups, DeletionPolicy.ALL, prompter, force_delete=True)
        assert sorted(p.name for p in deleted) == ['c.mp4', 'd.mp4', 'e.mp4']
        assert remaining(video_dir) == ['a.mp4', 'b.mp4']
        assert prompter.asked == []

    def test_yes_deletes_all_but_the_chosen_file(self, triple, video_dir):
        prompter = ScriptedPrompter(selections=[lambda choices: choices[1][1]])
        deleted = apply_deletion_policy([triple], DeletionPolicy.YES, prompter)
        assert sorted(p.name for p in deleted) == ['a.mp4', 'c.mp4']
        assert remaining(video_dir) == ['b.mp4']

    def test_yes_offers_every_member_and_keep_all(self, triple):
        prompter = ScriptedPrompter(selections=[KEEP_ALL])
        apply_deletion_policy([triple], DeletionPolicy.YES, prompter)
        _, _, choices = prompter.asked[0]
        assert [value for _, value in choices] == triple.paths + [KEEP_ALL]

    def test_yes_keep_all_deletes_nothing(self, triple, video_dir):
        prompter = ScriptedPrompter(selections=[KEEP_ALL])
        assert apply_deletion_policy([triple], DeletionPolicy.YES, prompter) == []
        assert len(remaining(video_dir)) == 3

    def test_yes_asks_once_per_group(self, two_groups, video_dir):
        prompter = ScriptedPrompter(selections=[None, lambda choices: choices[2][1]])
        deleted = apply_deletion_policy(two_groups, DeletionPolicy.YES, prompter)
        assert sorted(p.name for p in deleted) == ['b.mp4', 'd.mp4']
        assert remaining(video_dir) == ['a.mp4', 'c.mp4', 'e.mp4']
        assert len(prompter.asked) == 2

    def test_failed_deletion_is_skipped(self, triple, video_dir, caplog):
        (video_dir / 'b.mp4').unlink()
        deleted = apply_deletion_policy([triple], DeletionPolicy.ALL, force_delete=True)
        assert [p.name for p in deleted] == ['c.mp4']
        assert 'Failed to delete' in caplog.text


class TestReport:
    def test_report_uses_relative_paths(self, two_groups, video_dir, tmp_path):
        out = tmp_path / 'out'
        report_path = write_report(two_groups, [video_dir / 'c.mp4'], video_dir, out)
        data = json.loads(report_path.read_text())
        assert data['duplicateGroups'] == [['a.mp4', 'c.mp4'], ['b.mp4', 'd.mp4', 'e.mp4']]
        assert data['deletedFiles'] == ['c.mp4']
        assert data['timestamp'].endswith('Z')
        assert report_path.parent == out
        assert report_path.name.startswith('duplicate-videos-report-')

    def test_empty_report(self, video_dir, tmp_path):
        report_path = write_report([], [], video_dir, tmp_path / 'out', kind='images')
        report = Report.from_dict(json.loads(report_path.read_text()))
        assert report.duplicate_groups == []
        assert report.deleted_files == []
        assert report_path.name.startswith('duplicate-images-report-')

    def test_report_names_do_not_collide(self, tmp_path):
        first = report_path_for(tmp_path, 'videos', '20240101-120000')
        first.write_text('{}')
        second = report_path_for(tmp_path, 'videos', '20240101-120000')
        assert first != second
        assert second.name == 'duplicate-videos-report-20240101-120000-1.json'


class TestHandleDuplicates:
    def test_no_policy_reports_groups_without_deleting(self, two_groups, video_dir, tmp_path):
        report_path = handle_duplicates(two_groups, DeletionPolicy.NO, video_dir, tmp_path / 'out')
        data = json.loads(report_path.read_text())
        assert len(data['duplicateGroups']) == 2
        assert data['deletedFiles'] == []
        assert len(remaining(video_dir)) == 5

    def test_all_policy_reports_deleted_files(self, triple, video_dir, tmp_path):
        report_path = handle_duplicates([triple], DeletionPolicy.ALL, video_dir, tmp_path / 'out',
                                        prompter=ScriptedPrompter(confirmations=[True]))
        data = json.loads(report_path.read_text())
        assert data['duplicateGroups'] == [['a.mp4', 'b.mp4', 'c.mp4']]
        assert data['deletedFiles'] == ['b.mp4', 'c.mp4']
