from typing import Iterable, List, Tuple

from dupefinder.core.models import CandidateFile, DuplicateGroup, KeepStrategy


class DuplicateService:
    @staticmethod
    def select_file_to_keep(group: DuplicateGroup, strategy: KeepStrategy = KeepStrategy.NEWEST) -> CandidateFile:
        """
        Picks the member of a group that survives disposal.

        Ties (same timestamp or same path length) go to the lexicographically
        smallest path so the choice is stable between runs.
        """
        if strategy == KeepStrategy.NEWEST:
            return min(group.files, key=lambda f: (-f.last_modified, f.path))
        if strategy == KeepStrategy.OLDEST:
            return min(group.files, key=lambda f: (f.last_modified, f.path))
        if strategy == KeepStrategy.SHORTEST_PATH:
            return min(group.files, key=lambda f: (len(f.path), f.path))
        raise ValueError(f"Unknown keep strategy: {strategy!r}")

    @staticmethod
    def split_group(
        group: DuplicateGroup, strategy: KeepStrategy = KeepStrategy.NEWEST
    ) -> Tuple[CandidateFile, List[CandidateFile]]:
        """
        Returns:
            - the file to keep
            - the other members, in group order, to be disposed of
        """
        keeper = DuplicateService.select_file_to_keep(group, strategy)
        return keeper, [f for f in group.files if f.path != keeper.path]

    @staticmethod
    def remove_files_from_groups(groups: Iterable[DuplicateGroup], file_paths: Iterable[str]) -> List[DuplicateGroup]:
        """
        Removes files with the specified paths from all duplicate groups.

        Groups that contain fewer than 2 files after removal are discarded.

        Args:
            groups: Duplicate groups to update.
            file_paths: Paths of files to remove.

        Returns:
            list[DuplicateGroup]: New groups; the input groups are left untouched.
        """
        removed = set(file_paths)
        updated_groups = []
        for group in groups:
            filtered_files = [f for f in group.files if f.path not in removed]
            if len(filtered_files) >= 2:
                updated_groups.append(DuplicateGroup(digest=group.digest, size=group.size, files=filtered_files))
        return updated_groups

    @staticmethod
    def keep_only_one_file_per_group(
        groups: List[DuplicateGroup], strategy: KeepStrategy = KeepStrategy.NEWEST
    ) -> Tuple[List[str], List[DuplicateGroup]]:
        """
        Keeps one file per group and marks the rest for deletion.
        Returns:
            - List of file paths to be deleted
            - Updated list of duplicate groups (empty once every group is reduced to one file)
        """
        files_to_delete = []
        for group in groups:
            _, others = DuplicateService.split_group(group, strategy)
            files_to_delete.extend(f.path for f in others)

        updated_groups = DuplicateService.remove_files_from_groups(groups, files_to_delete)
        return files_to_delete, updated_groups

    @staticmethod
    def total_wasted_bytes(groups: Iterable[DuplicateGroup]) -> int:
        """Space that keeping one copy per group would free."""
        return sum(group.wasted_bytes for group in groups)
