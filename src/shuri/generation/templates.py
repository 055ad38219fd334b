"""
Text bodies for the generated artifacts.

The generator treats these as opaque strings; nothing downstream parses them.
"""
from .naming import kebab_case, title_words


def _style_block(style_file: str | None) -> str:
    if style_file:
        lang = style_file.rsplit(".", 1)[-1]
        return f'<style lang="{lang}" scoped>\n@import "./{style_file}";\n</style>'
    return "<style scoped>\n/* styles */\n</style>"


def vue2_template(component_name: str, style_file: str | None = None) -> str:
    return f"""<template>
  <div class="{kebab_case(component_name)}">
  </div>
</template>

<script>
export default {{
  name: '{component_name}',
  props: {{}}
}};
</script>

{_style_block(style_file)}
"""


def vue3_template(component_name: str, style_file: str | None = None) -> str:
    return f"""<template>
  <div class="{kebab_case(component_name)}">
  </div>
</template>

<script setup>
defineOptions({{
  name: '{component_name}'
}});

const props = defineProps({{}});
</script>

{_style_block(style_file)}
"""


def vue_template(component_name: str, vue_version: int, style_file: str | None = None) -> str:
    generators = {2: vue2_template, 3: vue3_template}
    return generators.get(vue_version, vue3_template)(component_name, style_file)


def style_template(kebab_name: str) -> str:
    return f""".{kebab_name} {{
  display: block;
}}
"""


def test_template(component_name: str, vue_version: int, file_name: str | None = None) -> str:
    file_name = file_name or component_name
    if vue_version == 2:
        return f"""import {{ shallowMount }} from '@vue/test-utils';
import {component_name} from './{file_name}.vue';

describe('{component_name}', () => {{
  it('exports a valid component', () => {{
    const wrapper = shallowMount({component_name});
    expect(wrapper.exists()).toBe(true);
  }});
}});
"""
    return f"""import {{ mount }} from '@vue/test-utils';
import {component_name} from './{file_name}.vue';

describe('{component_name}', () => {{
  it('mounts', () => {{
    const wrapper = mount({component_name});
    expect(wrapper.exists()).toBe(true);
  }});
}});
"""


def index_template(component_name: str, file_name: str) -> str:
    return f"""import {{ registerComponent }} from '@utils/plugins';
import {component_name} from './{file_name}.vue';

const Plugin = {{
  install(Vue) {{
    registerComponent(Vue, {component_name});
  }},
}};

export default Plugin;
export {{ {component_name} }};
"""


def docs_md_template(component_name: str, kebab_name: str) -> str:
    return f"""# {title_words(kebab_name)}

`{component_name}` is a component.

<doc-example title="Example" file="{kebab_name}/{kebab_name}-example" />
"""


def docs_vue_template(component_name: str, kebab_name: str) -> str:
    return f"""<template>
  <div>
    <{component_name} />
  </div>
</template>

<script>
export default {{
  name: '{component_name}Example'
}};
</script>

<style scoped>
/* example styles */
</style>
"""


def docs_api_template() -> str:
    return """module.exports = {
  attributes: {
    data: [
      {
        prop: "",
        description: "",
        type: "",
        defaultValue: "",
        acceptedValues: "",
      },
    ],

    events: {
      columns: [
        { name: "name", label: "Event name", truncate: false },
        { name: "description", label: "Description", truncate: false },
        { name: "payload", label: "Payload" },
      ],
      data: [
        {
          name: "",
          description: "",
          payload: "",
        },
      ],
    },
  },
};
"""
