"""sng-ui 组件安装器

以 "复制而非引用" 的方式，把组件库源码树中的单个组件及其本地依赖闭包
拷贝到使用方项目中，并汇总需要额外安装的第三方包。
"""

__version__ = "0.3.0"
