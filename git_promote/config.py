"""The config module provides the Config class.

The configuration file is optional. It lives at the root of the git work
tree and is named .git-promote:

    [git-promote]
    remote = origin
    git_executable = git
"""

import os
from configparser import ConfigParser
from typing import Optional

import git
from git.exc import InvalidGitRepositoryError, NoSuchPathError

CONFIG_FILE_NAME = '.git-promote'
CONFIG_SECTION = 'git-promote'


def find_base_dir(start_dir: Optional[str] = None) -> str:
    """
    Returns the root of the git work tree containing start_dir.

    Falls back to start_dir (or the current directory) when it is not inside
    a git repository.
    """
    start_dir = os.path.abspath(start_dir or os.path.curdir)
    try:
        git_repo = git.Repo(start_dir, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        return start_dir
    return git_repo.working_tree_dir or start_dir


class Config:
    "Reads the .git-promote file of a repository."
    __remote: str = 'origin'
    __git_executable: str = 'git'

    def __init__(self, base_dir: Optional[str] = None):
        self.__base_dir = find_base_dir(base_dir)
        self.__file = os.path.join(self.__base_dir, CONFIG_FILE_NAME)
        if os.path.exists(self.__file):
            self.read()

    def read(self):
        "Sets __remote and __git_executable"
        config = ConfigParser()
        config.read(self.__file, encoding='utf-8')
        if not config.has_section(CONFIG_SECTION):
            return
        section = config[CONFIG_SECTION]
        self.__remote = section.get('remote', self.__remote).strip() or 'origin'
        self.__git_executable = section.get('git_executable', self.__git_executable).strip() or 'git'

    @property
    def base_dir(self) -> str:
        return self.__base_dir

    @property
    def file(self) -> str:
        return self.__file

    @property
    def remote(self) -> str:
        return self.__remote

    @property
    def git_executable(self) -> str:
        return self.__git_executable
